from .random import RandomGenerator, SecretsRandomGenerator

__all__ = ["RandomGenerator", "SecretsRandomGenerator"]
