"""District resolution engine: normalize, resolve, bound-check, plan, apply."""
