"""Import pipeline services: row processing, aggregation, reporting."""
