"""A small interactive command shell with pipes, redirections and builtins."""

__version__ = "0.1.0"