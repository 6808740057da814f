"""Page and loader discovery, document rendering, build checks and a project command line for server-rendered React pages."""

__version__ = "0.1.0"