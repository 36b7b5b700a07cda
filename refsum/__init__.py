"""refsum - stream digests of files and verify them against reference lists."""

__version__ = "0.3.0"
