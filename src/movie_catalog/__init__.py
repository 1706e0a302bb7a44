"""Movie catalog: scheduled ingestion of a movie RSS feed into a SQL catalog."""

__version__ = "0.1.0"
