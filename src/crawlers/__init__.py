"""Content source package (MediaWiki)."""

from .content_source import ContentSource
from .wiki_client import MediaWikiClient, get_shared_wiki_client, shutdown_shared_wiki_client

__all__ = [
    "ContentSource",
    "MediaWikiClient",
    "get_shared_wiki_client",
    "shutdown_shared_wiki_client",
]
