"""Request authentication and authorization dependencies."""
