"""Runtime support: observability for railcase."""
