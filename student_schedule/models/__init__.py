# Domain models: sections, time intervals and the schedule container
