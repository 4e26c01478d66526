"""Trading journal analytics: risk metrics, health score and contextual segmentation."""

__version__ = "0.1.0"
