"""HouseConnect - identity and access core for the accommodation marketplace."""

__version__ = "0.1.0"
