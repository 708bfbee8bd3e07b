"""Calendar and task board view logic."""
