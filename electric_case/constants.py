"""Constants used across the electric-case package."""

HYPHEN = "-"
SNAKE_SEPARATOR = "_"

# Replaces hyphens while a token is temporarily de-hyphenated; must be one character
SUBSTITUTION_JOINER = SNAKE_SEPARATOR
