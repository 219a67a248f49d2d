"""Cliente lookup service: geolocation and sales contact by customer id."""

__version__ = "1.0.0"
