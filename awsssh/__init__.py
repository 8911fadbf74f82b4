"""awsssh - fuzzy-pick EC2 instances and open shells on them."""

__version__ = "0.1.0"
