"""Sort AI-generated images into folders by the prompt stored in their metadata."""

__version__ = "1.0.0"
