# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Annotations for the shapes that have no builtin Python counterpart.

Fixed-width numbers are `NewType`s, at runtime their values are plain `int`s and `float`s:

>>> U8(255)
255
>>> isinstance(I128(-1), int)
True

`FixedArray[T, N]` is a tuple of exactly N elements of type T:

>>> FixedArray[U8, 3]
serdecore.types.FixedArray[serdecore.types.U8, 3]
>>> from typing import get_args, get_origin
>>> get_origin(FixedArray[U8, 3]) is FixedArray
True
>>> get_args(FixedArray[U8, 3])[1]
3

`Box[T]` only exists in annotations, a `Box[T]` value is the T value itself.

`Option[T]` is the optional that can nest, its present values are wrapped in `Some`.
"""

from types import GenericAlias
from typing import Any, Generic, NewType, TypeVar

T = TypeVar('T')

Char = NewType('Char', str)

F32 = NewType('F32', float)
F64 = NewType('F64', float)

U8 = NewType('U8', int)
U16 = NewType('U16', int)
U32 = NewType('U32', int)
U64 = NewType('U64', int)
U128 = NewType('U128', int)

I8 = NewType('I8', int)
I16 = NewType('I16', int)
I32 = NewType('I32', int)
I64 = NewType('I64', int)
I128 = NewType('I128', int)


class FixedArray(tuple):
    """ Annotation for a homogeneous array with a length that is part of the type, `FixedArray[T, N]`.

    Values are regular tuples, lists are also accepted when serializing.
    """

    __slots__ = ()

    def __class_getitem__(cls, params: Any) -> GenericAlias:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError('expected FixedArray[<type>, <length>]')
        item_type, length = params
        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise TypeError(f'FixedArray length must be a non-negative int, got {length!r}')
        return GenericAlias(cls, (item_type, length))


class Box(Generic[T]):
    """ Annotation for a value held through an owning indirection.

    It makes no difference on the wire, `Box[T]` serializes exactly as `T`. It exists so recursive types can say where
    the recursion happens, as in `Cons: tuple[int, Box['IntList']]`.
    """

    __slots__ = ()

    def __init__(self) -> None:
        raise TypeError('Box is only meant for annotations, use the boxed value directly')


class Option(Generic[T]):
    """ Annotation for an optional value that is spelled out, its values are `None` (absent) or `Some(value)`.

    It is encoded exactly like `T | None`, but since the present value is wrapped it can nest and it can hold a unit:

    >>> from serdecore.serde_types import make_serde_type
    >>> make_serde_type(Option[None]).to_bytes(Some(None)).hex()
    '01'
    >>> make_serde_type(Option[Option[U8]]).from_bytes(bytes.fromhex('0100'))
    Some(None)
    """

    __slots__ = ()

    def __init__(self) -> None:
        raise TypeError('Option is only meant for annotations, use None or Some(value)')


class Some(Generic[T]):
    """The present value of an `Option[T]`."""

    __slots__ = ('value',)

    def __init__(self, value: T) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Some):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((Some, self.value))

    def __repr__(self) -> str:
        return f'Some({self.value!r})'
