"""Base layer: models, provider families, errors, logging and HTTP."""
