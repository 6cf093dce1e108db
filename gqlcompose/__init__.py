"""gqlcompose - compose modular GraphQL SDL documents into one schema."""

__version__ = "1.0.0"
