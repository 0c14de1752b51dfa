class GenerationError(RuntimeError):
    """A generation run could not produce a usable level (e.g. no rooms fit)."""
