"""Django integration of the Newsroom newsletter service."""
