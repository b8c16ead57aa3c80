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

from types import UnionType


def is_subclass(cls: type, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for recursive NewType classes.

    Normal behavior from `issubclass`:

    >>> is_subclass(int, int)
    True
    >>> is_subclass(bool, int)
    True
    >>> is_subclass(bool, int | str)
    True
    >>> is_subclass(str, int)
    False

    But `is_subclass` also works when a NewType is given as arg 1:

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> is_subclass(N, str)
    False
    >>> M = NewType('M', N)
    >>> is_subclass(M, int)
    True
    """
    while (super_type := getattr(cls, '__supertype__', None)) is not None:
        cls = super_type
    if not isinstance(cls, type):
        return False
    return issubclass(cls, class_or_tuple)


def get_newtype_name(type_: object) -> str | None:
    """ Name of a NewType, or None if the given object is not a NewType.

    >>> from typing import NewType
    >>> get_newtype_name(NewType('U8', int))
    'U8'
    >>> get_newtype_name(int) is None
    True
    """
    if getattr(type_, '__supertype__', None) is None:
        return None
    return getattr(type_, '__name__', None)
