"""mavenindex - browsable Markdown indexes for Maven-style artifact trees."""

__version__ = "0.1.0"
