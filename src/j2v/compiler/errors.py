"""Exceptions raised while compiling a request body."""


class ElementValidationError(ValueError):
    """One or more elements failed structural validation.

    The message is the aggregated report and is meant to be shown verbatim.
    """


class ElementProcessingError(ValueError):
    """A required element could not be converted to its API shape."""
