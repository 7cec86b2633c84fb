"""Record transformation core: models, levels, values and the handler."""
