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

from __future__ import annotations

from threading import RLock
from typing import TYPE_CHECKING, Any, Callable, TypeVar

if TYPE_CHECKING:
    from serdecore.serde_types.serde_type import SerdeType

S = TypeVar('S', bound='SerdeType')


class SerdeTypeRegistry:
    """ Keeps the SerdeType of each named composite (sum types, dataclasses and namedtuples) by class.

    A composite is registered before its members are resolved, so a member that refers back to the composite (through
    a `Box`, a `list`, an optional...) gets the very same SerdeType instead of recursing forever. Composites only become
    visible to other threads after the outermost build completes, if any step fails everything pending is discarded.

    While a composite is pending it is assumed to be hashable. When the outermost build completes the hashability of
    every pending composite is recomputed until nothing changes, and only then the checks that depend on it (see
    `check_when_built`) are run.
    """

    __slots__ = ('_lock', '_resolved', '_pending', '_checks', '_depth')

    def __init__(self) -> None:
        self._lock = RLock()
        self._resolved: dict[type, SerdeType] = {}
        self._pending: dict[type, SerdeType] = {}
        self._checks: list[Callable[[], None]] = []
        self._depth = 0

    def __contains__(self, class_: Any) -> bool:
        with self._lock:
            return class_ in self._resolved

    def __len__(self) -> int:
        with self._lock:
            return len(self._resolved)

    def get_or_build(self, class_: type, build: Callable[[], S], resolve: Callable[[S], None]) -> S:
        """ Get the SerdeType registered for `class_`, building it if needed.

        `build` must create the instance without looking at any member, `resolve` completes it and is free to build
        other SerdeTypes (including the one being completed, which will be found as pending). The instance must have
        an `_update_hashable()` method that recomputes its hashability and returns whether it changed.
        """
        with self._lock:
            found = self._resolved.get(class_) or self._pending.get(class_)
            if found is not None:
                return found  # type: ignore[return-value]
            serde_type = build()
            self._pending[class_] = serde_type
            self._depth += 1
            try:
                resolve(serde_type)
                if self._depth == 1:
                    self._settle()
                    self._resolved.update(self._pending)
            finally:
                self._depth -= 1
                if self._depth == 0:
                    self._pending.clear()
                    self._checks.clear()
            return serde_type

    def check_when_built(self, check: Callable[[], None]) -> None:
        """ Run `check` once the hashability of the composites being built is final, right away if nothing is.

        A check fails by raising, which makes the whole build fail.
        """
        with self._lock:
            if self._depth == 0:
                check()
            else:
                self._checks.append(check)

    def _settle(self) -> None:
        # hashability only ever goes from True to False, so this ends
        changed = True
        while changed:
            changed = False
            for serde_type in self._pending.values():
                if serde_type._update_hashable():  # type: ignore[attr-defined]
                    changed = True
        for check in self._checks:
            check()
