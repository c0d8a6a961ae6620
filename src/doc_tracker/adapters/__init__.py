"""Host adapters that put a UI in front of a Session."""
