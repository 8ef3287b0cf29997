"""Teacher-side client for student groups, task variants, question banks, settings and server requests."""

__version__ = "0.1.0"