"""Request guards."""
