"""CityVibes: mood-to-place ranking service."""
