"""Paper trading backend: simulated trades, portfolios, feed and leaderboard."""

__version__ = "0.1.0"
