from collections.abc import Sequence
from typing import TypeVar, Generic, List, Iterable, overload


# Define a type variable T that can be any type
T = TypeVar('T')

class TypedList(Generic[T], Sequence[T]):
    """ A list which only accepts elements of __allowed_types__.
    Subclasses can hook __on_add__ to react to every element entering the list. """
    
    __allowed_types__: tuple[type, ...]
    """ Element type must be specified by inheriting classes (or per instance). """

    def __init__(self, initial_elements: Iterable[T] | None = None):
        self._elements: List[T] = []

        if initial_elements:
            self.extend(initial_elements)

    def __check_type__(self, element: T):
        """
        Check whether the element is of the correct type.

        :param element: The element to check.
        :raises TypeError: If the element is not of the expected type.
        """
        if not isinstance(element, self.__allowed_types__):
            allowed = ", ".join(t.__name__ for t in self.__allowed_types__)
            raise TypeError(f"Got invalid type {type(element).__name__}. Expected one of: {allowed}.")

    def __on_add__(self, element: T) -> None:
        """ Override this to run logic whenever an element is added to the list. """
        pass

    def __on_remove__(self, element: T) -> None:
        """ Override this to run logic whenever an element leaves the list. """
        pass

    def append(self, element: T):
        self.__check_type__(element)
        self.__on_add__(element)
        self._elements.append(element)

    def extend(self, elements: Iterable[T]):
        elements = list(elements)
        for element in elements:
            self.__check_type__(element)
        for element in elements:
            self.__on_add__(element)
        self._elements.extend(elements)

    def remove(self, element: T) -> None:
        removed = self._elements.pop(self._elements.index(element))
        self.__on_remove__(removed)

    def clear(self) -> None:
        removed = list(self._elements)
        self._elements.clear()
        for element in removed:
            self.__on_remove__(element)

    @overload
    def __getitem__(self, idxs: int) -> T: ...
    
    @overload
    def __getitem__(self, idxs: slice) -> list[T]: ...
    
    def __getitem__(self, idxs: int | slice) -> T | list[T]:
        """ Slices return a plain list so that sliced views never re-parent elements. """
        return self._elements[idxs]

    def __setitem__(self, index: int, element: T):
        self.__check_type__(element)
        displaced = self._elements[index]
        if displaced is not element:
            self.__on_remove__(displaced)
        self.__on_add__(element)
        self._elements[index] = element

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def __str__(self) -> str:
        return str(self._elements)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, TypedList):
            return self._elements == other._elements
        if isinstance(other, list):
            return self._elements == other
        return NotImplemented

    def __contains__(self, item) -> bool:
        return item in self._elements

    def __reversed__(self):
        return reversed(self._elements)

    def index_of(self, element: T) -> int:
        """ Identity-based index lookup. Documents compare by value, so list.index() would be ambiguous. """
        for idx, candidate in enumerate(self._elements):
            if candidate is element:
                return idx
        raise ValueError(f"{element!r} is not in list")
