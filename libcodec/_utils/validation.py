def validate_non_negative(value: int, name: str) -> None:
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ValueError(msg)


def validate_window(size: int, offset: int, length: int) -> None:
    validate_non_negative(offset, "offset")
    validate_non_negative(length, "length")
    if offset + length > size:
        msg = f"input window out of range: offset={offset} length={length} size={size}"
        raise IndexError(msg)


def validate_output_size(size: int, required: int) -> None:
    if size < required:
        msg = f"output buffer too small: need {required} bytes, got {size}"
        raise IndexError(msg)
