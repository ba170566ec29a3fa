from db import Base

__all__ = ["Base"]
