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

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, is_dataclass
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, ForwardRef, Iterator, NamedTuple, TypeAlias, Union, get_args, get_origin

from structlog import get_logger

from serdecore.sum_type import Sum
from serdecore.utils.typing import get_newtype_name, is_subclass

if TYPE_CHECKING:
    from serdecore.serde_types import SerdeType


logger = get_logger()

TypeAliasMap: TypeAlias = Mapping[Any, Any]
TypeToSerdeTypeMap: TypeAlias = Mapping[Any, type['SerdeType']]


def get_origin_classes(type_: type) -> Iterator[type]:
    """ This util function is useful to generalize over a type T and unions A | B.

    A simple type T would be yielded directly, and an union will yield each type in it. Only origin types are yielded,
    arguments are discarded.

    >>> list(get_origin_classes(int))
    [<class 'int'>]
    >>> list(get_origin_classes(int | str))
    [<class 'int'>, <class 'str'>]
    >>> list(get_origin_classes(dict[int, str] | None))
    [<class 'dict'>, <class 'NoneType'>]
    """
    origin_type: type = get_origin(type_) or type_
    if origin_type is UnionType or origin_type is Union:
        for arg_type in get_args(type_) or tuple():
            origin_arg_type: type = get_origin(arg_type) or arg_type
            yield origin_arg_type
    else:
        yield origin_type


def is_origin_hashable(type_: type) -> bool:
    """ Checks whether the given type signature satisfies `collections.abc.Hashable`.

    This check ignores type arguments, but takes into account all types of an union and follows `NewType`s.

    >>> from serdecore.types import FixedArray, U8
    >>> is_origin_hashable(int)
    True
    >>> is_origin_hashable(U8)
    True
    >>> is_origin_hashable(str | None)
    True
    >>> is_origin_hashable(FixedArray[U8, 2])
    True
    >>> is_origin_hashable(list[int])
    False
    >>> is_origin_hashable(dict)
    False

    Even though list is not hashable, a tuple[list] is, simply because arguments are ignored:
    >>> is_origin_hashable(tuple[list])
    True

    Callers should recurse on their own if they need to deal with type arguments. In practice when building a
    SerdeType from a type the recursion of the build process will deal with that.
    """
    return all(_is_origin_hashable(origin_class) for origin_class in get_origin_classes(type_))


def _is_origin_hashable(origin_class: type) -> bool:
    """ Inner implementation of is_origin_hashable, only checks a single origin class. """
    if origin_class is None:
        return True
    return is_subclass(origin_class, Hashable)


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> from serdecore.types import U32
    >>> pretty_type(None)
    'None'
    >>> pretty_type(U32)
    'U32'
    >>> pretty_type(int)
    'int'
    >>> pretty_type(dict[str, int])
    'dict[str, int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif (newtype_name := get_newtype_name(type_)) is not None:
        return newtype_name
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__qualname__', None) or repr(type_)


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its usable alias including the type's arguments.

    For example, `Sequence` is mapped to `list` and `Mapping` to `dict` in the default alias map:

    >>> from collections.abc import Mapping, Sequence
    >>> from serdecore.serde_types import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(tuple[str, Sequence[Mapping[int, Sequence[str]]], bool], alias_map, _verbose=False)
    tuple[str, list[dict[int, list[str]]], bool]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    origin_type = get_origin(type_) or type_
    aliased_origin: Any
    replaced = False

    # XXX: special case, replace typing.Union with types.UnionType
    if origin_type is Union:
        aliased_origin = UnionType
    elif isinstance(origin_type, Hashable) and origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    if hasattr(type_, '__args__') and get_origin(type_) is not None:
        type_args = get_args(type_)
        if not type_args:
            # tuple[()] is the only case, keep it as it is
            return type_, replaced

        # use _get_aliased_type for recursion so we don't log multiple times when a replacement happens
        aliased_args_replaced = [_get_aliased_type(arg, alias_map) for arg in type_args]
        aliased_args, args_replaced = zip(*aliased_args_replaced)
        replaced |= any(args_replaced)

        # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
        if aliased_origin is UnionType:
            return reduce(or_, aliased_args), replaced

        assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
        return aliased_origin[*aliased_args], replaced
    else:
        # normal case when there aren't type arguments
        return aliased_origin, replaced


def get_usable_origin_type(type_: Any, /, *, type_map: 'SerdeType.TypeMap', _verbose: bool = True) -> Any:
    """ The purpose of this function is to map a given type into a key that is usable in a SerdeType.TypeMap

    It takes into account type-aliasing according to `type_map.alias_map`. If the given type cannot be used in the
    given type_map, a TypeError exception will be raised.

    The returned key is guaranteed to exist in `type_map.serde_types_map`. Named composites are looked up by kind:
    any `Sum` subclass by `Sum`, any dataclass by `dataclass` and any namedtuple by `NamedTuple`.

    >>> from collections.abc import Sequence
    >>> from serdecore.serde_types import DEFAULT_TYPE_MAP as type_map
    >>> get_usable_origin_type(Sequence[int], type_map=type_map, _verbose=False)
    <class 'list'>
    >>> get_usable_origin_type(int | str, type_map=type_map, _verbose=False)
    Traceback (most recent call last):
    ...
    TypeError: type int | str is not supported by any SerdeType class
    """
    if isinstance(type_, (str, ForwardRef)):
        raise TypeError(f'unresolved forward reference: {type_!r}')

    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type: Any = get_origin(aliased_type) or aliased_type

    if origin_aliased_type is UnionType:
        # When it's an union and None is not in it, it's not Optional, so we must index by args which is a tuple of
        # types, no default entry uses that, a sum type is the way to express a choice between types
        args = get_args(aliased_type)
        assert args is not None
        if NoneType not in args:
            origin_aliased_type = args

    if isinstance(origin_aliased_type, Hashable) and origin_aliased_type in type_map.serde_types_map:
        return origin_aliased_type

    if isinstance(origin_aliased_type, type):
        if Sum in type_map.serde_types_map and issubclass(origin_aliased_type, Sum):
            return Sum
        if dataclass in type_map.serde_types_map and is_dataclass(origin_aliased_type):
            return dataclass

    if NamedTuple in type_map.serde_types_map and NamedTuple in getattr(type_, '__orig_bases__', tuple()):
        return NamedTuple

    raise TypeError(f'type {pretty_type(type_)} is not supported by any SerdeType class')

