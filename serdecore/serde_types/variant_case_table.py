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
The variant case table of a sum type has one decoding closure per alternative, in declaration order.

Entry `i` decodes the payload of alternative `i` and wraps it in that alternative, so decoding a sum type is reading
the variant index, checking it against the length of the table and calling the entry at that index:

>>> from serdecore.serialization import Deserializer
>>> from serdecore.serialization.compound_encoding.variant import decode_variant
>>> from serdecore.sum_type import Sum
>>> from serdecore.serde_types import make_serde_type
>>> from serdecore.types import U32
>>> class Reply(Sum):
...     Empty: None
...     Count: U32
>>> table = VariantCaseTable.build(Reply, [make_serde_type(None), make_serde_type(U32)])
>>> len(table)
2
>>> de = Deserializer.build_replay_deserializer([('variant_index', 1), ('u32', 42)])
>>> decode_variant(de, table)
Reply.Count(42)

A table is immutable, it is built once for each sum type and shared by every decoding of that type.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from structlog import get_logger
from typing_extensions import Self

from serdecore.serde_types.serde_type import SerdeType
from serdecore.serialization import Deserializer
from serdecore.serialization.compound_encoding import Decoder
from serdecore.sum_type import Sum

logger = get_logger()

S = TypeVar('S', bound=Sum)


class VariantCaseTable(Generic[S]):
    __slots__ = ('_sum_class', '_cases')

    _sum_class: type[S]
    _cases: tuple[Decoder[S], ...]

    def __init__(self, sum_class: type[S], cases: Sequence[Decoder[S]]) -> None:
        self._sum_class = sum_class
        self._cases = tuple(cases)

    @classmethod
    def build(cls, sum_class: type[S], payloads: Sequence[SerdeType[Any]]) -> Self:
        """ Build the table of a sum type given the SerdeType of each alternative's payload, in declaration order.
        """
        variant_classes = sum_class.variants()
        if len(variant_classes) != len(payloads):
            raise ValueError(f'{sum_class.__qualname__} has {len(variant_classes)} alternatives, '
                             f'got {len(payloads)} payloads')
        cases = tuple(_make_case(variant_class, payload) for variant_class, payload in zip(variant_classes, payloads))
        logger.debug('variant case table built', sum_type=sum_class.__qualname__, alternatives=len(cases))
        return cls(sum_class, cases)

    @property
    def sum_class(self) -> type[S]:
        return self._sum_class

    def __len__(self) -> int:
        return len(self._cases)

    def __getitem__(self, index: int) -> Decoder[S]:
        return self._cases[index]

    def __repr__(self) -> str:
        return f'VariantCaseTable({self._sum_class.__qualname__}, {len(self._cases)} cases)'


def _make_case(variant_class: type[S], payload: SerdeType[Any]) -> Decoder[S]:
    def case(deserializer: Deserializer) -> S:
        return variant_class(payload.deserialize(deserializer))
    return case
