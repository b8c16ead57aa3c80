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


class SerializationError(Exception):
    """Base class for every error raised while writing or reading values."""
    pass


class OutOfDataError(SerializationError):
    """The underlying medium cannot supply more data."""
    pass


class TooLongError(SerializationError):
    """A length is larger than what is allowed."""
    pass


class BadDataError(SerializationError, ValueError):
    """ The data read cannot be turned into a valid value of the requested kind.

    Also a ValueError, because that's what a malformed primitive (an invalid bool byte, invalid utf-8) is.
    """
    pass


class InvalidOptionDiscriminantError(BadDataError):
    """An optional value has a discriminant that is neither 0 (absent) nor 1 (present)."""

    def __init__(self, discriminant: int) -> None:
        super().__init__('invalid option discriminant', discriminant)
        self.discriminant = discriminant


class VariantIndexOutOfRangeError(BadDataError):
    """A sum type's variant index does not address any of its declared alternatives."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__('variant index out of range', index, count)
        self.index = index
        self.count = count


class DuplicateKeyError(BadDataError):
    """A decoded map has the same key more than once and duplicates are configured to be rejected."""
    pass


class UnsupportedTypeError(SerializationError, TypeError):
    """There is no codec for the given type annotation."""
    pass
