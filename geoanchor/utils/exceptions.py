class TransformException(Exception):
    """An exception for any errors that occur while transforming coordinates"""


class OutOfRangeError(TransformException, ValueError):
    """
    Raised when a projected coordinate is too far from the anchor point to be
    represented as a single precision local coordinate.

    Attributes:
        axis: The name of the offending axis ("east", "north" or "height")
        value: The absolute coordinate value on that axis
        anchor_value: The anchor point value on that axis
        offset: The distance from the anchor on that axis
    """

    def __init__(self, axis: str, value: float, anchor_value: float, limit: float):
        self.axis = axis
        self.value = value
        self.anchor_value = anchor_value
        self.offset = value - anchor_value
        super().__init__(
            f"The point to be converted must be closer than {limit / 1000:g} km to the "
            f"anchor point on every axis; {axis} value: {value}, anchor {axis} value: "
            f"{anchor_value}, offset: {self.offset}"
        )
