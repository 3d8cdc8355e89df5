import enum


class DimensionType(str, enum.Enum):
    numeric = "numeric"
    alphabetic = "alphabetic"
