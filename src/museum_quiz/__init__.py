"""Museum exhibit quiz for the terminal."""
