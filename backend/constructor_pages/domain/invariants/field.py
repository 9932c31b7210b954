from .exceptions import InvariantViolation

def assert_field_positions(fields):
    positions = [field.position for field in fields]
    if not positions:
        return

    expected = list(range(1, len(positions) + 1))
    if sorted(positions) != expected:
        raise InvariantViolation(
            f"Field positions are not consecutive starting from 1: {positions}"
        )
