from prompt_refiner.refinement.factory import RefinerFactory
from prompt_refiner.refinement.refiner import Refiner

__all__ = ["Refiner", "RefinerFactory"]
