"""Infrastructure Layer — logging setup for the imperative shell."""
