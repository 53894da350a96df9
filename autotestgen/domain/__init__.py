from .models import GeneratedTest

__all__ = ["GeneratedTest"]
