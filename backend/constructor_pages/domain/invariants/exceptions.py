class InvariantViolation(Exception):
    """A structural invariant of the page tree or a field list is broken."""
