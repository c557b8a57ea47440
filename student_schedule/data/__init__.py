# Catalog loading and conversion
