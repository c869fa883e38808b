"""Services Layer — imperative shell around the pure path synthesis core."""
