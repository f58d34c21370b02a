# Copyright 2018 ICON Foundation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Named inputs of an action, and the payload that executes it"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

Entry = Tuple[str, Any]
Predicate = Callable[[Entry], bool]

_MISSING = object()


def _lowercase_key(key: str) -> str:
    if key is None:
        raise ValueError("key cannot be None")
    return key.lower()


class ActionInput:
    """Ordered mapping of action input names to values. Names are case insensitive."""

    def __init__(self):
        self._map: Dict[str, Any] = {}

    def put(self, key: str, value) -> 'ActionInput':
        self._map[_lowercase_key(key)] = value
        return self

    def put_if_absent(self, key: str, value) -> 'ActionInput':
        key = _lowercase_key(key)
        if key not in self._map:
            self._map[key] = value
        return self

    def replace(self, key: str, value) -> 'ActionInput':
        key = _lowercase_key(key)
        if key in self._map:
            self._map[key] = value
        return self

    def get(self, key: str):
        return self._map[_lowercase_key(key)]

    def get_or_default(self, key: str, default_value):
        return self._map.get(_lowercase_key(key), default_value)

    def contains_key(self, key: str) -> bool:
        return _lowercase_key(key) in self._map

    def remove(self, key: str) -> bool:
        return self._map.pop(_lowercase_key(key), _MISSING) is not _MISSING

    def to_array(self, predicate: Optional[Predicate] = None) -> Tuple[Entry, ...]:
        return tuple(entry for entry in self._map.items() if predicate is None or predicate(entry))

    def to_entries(self) -> Dict[str, Any]:
        return dict(self._map)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.to_array())

    def __len__(self):
        return len(self._map)

    def __contains__(self, key):
        return self.contains_key(key)

    def __eq__(self, other):
        if not isinstance(other, ActionInput):
            return NotImplemented
        return self._map == other._map

    def __repr__(self):
        return f"{type(self).__qualname__}({self._map!r})"

    def put_from_object(self, obj: Mapping) -> 'ActionInput':
        for key, value in obj.items():
            self.put(key, value)
        return self

    def put_from_object_if_absent(self, obj: Mapping) -> 'ActionInput':
        for key, value in obj.items():
            self.put_if_absent(key, value)
        return self

    def replace_from_object(self, obj: Mapping) -> 'ActionInput':
        for key, value in obj.items():
            self.replace(key, value)
        return self

    def put_from_objects(self, objs: Iterable[Mapping]) -> List['ActionInput']:
        return ActionInput.from_objects(objs)

    @classmethod
    def of(cls) -> 'ActionInput':
        return cls()

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> 'ActionInput':
        action_input = cls()
        for key, value in entries:
            action_input.put(key, value)
        return action_input

    @classmethod
    def from_object(cls, obj: Mapping) -> 'ActionInput':
        return cls().put_from_object(obj)

    @classmethod
    def from_objects(cls, objs: Iterable[Mapping]) -> List['ActionInput']:
        return [cls.from_object(obj) for obj in objs]


@dataclass(frozen=True)
class ActionBody:
    namespace: str
    name: str
    inputs: List[Union[ActionInput, Mapping]] = field(default_factory=list)
    description: str = ""

    def to_payload(self) -> dict:
        """Payload of an `execute` transaction. One argument row per input, in input order."""
        arguments = []
        for action_input in self.inputs:
            if not isinstance(action_input, ActionInput):
                action_input = ActionInput.from_object(action_input)
            arguments.append([value for _, value in action_input])

        return {
            "namespace": self.namespace,
            "action": self.name.lower(),
            "arguments": arguments
        }
