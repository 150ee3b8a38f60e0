"""DNS provider integration."""
