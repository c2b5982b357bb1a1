"""Adapter contract letting a tagged union classify itself as success or error."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inner.inner_variant import Result


class IntoResult(ABC):
    """
    Converts a value into a Result.

    Implement this for your own tagged unions to use the directives without an 'if'
    clause.  It also lets more than one arm count as success:

        class Fruit(TaggedUnion, IntoResult):
            Apple = variant(int)
            Orange = variant(int)
            Rotten = variant()

            def into_result(self) -> Result:
                if self.tag == "Rotten":
                    return Err(())

                return Ok(self.payload)
    """

    __slots__ = ()

    @abstractmethod
    def into_result(self) -> "Result":
        """Classify this value as Ok(payload) or Err(error)."""
