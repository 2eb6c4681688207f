"""Trade and economic data pipeline behind the Trading Places dashboard."""

__version__ = "0.1.0"
