"""Check a local MediaWiki installation's git repositories for updates."""

__version__ = "0.1.0"
SOURCE_URL = "https://github.com/theresnotime/manage-local-mediawiki"
