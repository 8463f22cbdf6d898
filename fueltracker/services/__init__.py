"""Services bridging persistence and the calculation core."""
