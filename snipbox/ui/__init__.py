"""Terminal panel for snipbox."""
