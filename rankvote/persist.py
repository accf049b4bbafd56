'''Serialization of election records to JSON-ready dictionaries.

The records are stored by all storage backends as opaque JSON blobs using
camelCase keys (``adminName``, ``voteStartTime``...) so that the same store
can be shared with clients written in other languages.
'''

import enum
import json
import dataclasses
from typing import Any, Dict, List, Optional, Type, TypeVar

ATOMIC_TYPES: List[type] = [
    str, int, float, bool, type(None),
]

Record = TypeVar('Record')


def record_serialization(class_: type) -> type:
    '''A decorator to provide to_dict() and from_dict() record methods.

    The class must be a dataclass. Its fields are serialized under their
    camelCase names unless the field metadata specifies a ``key``. Fields
    holding other records (or lists of them) must name the record class
    in the ``record`` metadata entry so that they can be deserialized.
    Unknown keys in the input are ignored; missing keys fall back to the
    field defaults.

    :param class_: The dataclass to add the methods to.
    '''
    fields = dataclasses.fields(class_)
    keys = {field.name: storage_key(field) for field in fields}

    def to_dict(self) -> Dict[str, Any]:
        return {
            keys[field.name]: serialize_value(getattr(self, field.name))
            for field in fields
        }

    def from_dict(cls, data: Dict[str, Any]) -> Any:
        if not isinstance(data, dict):
            raise ValueError(
                f'invalid {cls.__name__} record: dict expected, got {data!r}'
            )
        params = {}
        for field in fields:
            key = keys[field.name]
            if key in data:
                params[field.name] = deserialize_value(
                    data[key], field.metadata.get('record')
                )
        try:
            return cls(**params)
        except TypeError as e:
            raise ValueError(f'invalid {cls.__name__} record: {e}') from e

    class_.to_dict = to_dict
    class_.from_dict = classmethod(from_dict)
    return class_


def storage_key(field: dataclasses.Field) -> str:
    if 'key' in field.metadata:
        return field.metadata['key']
    return to_camel_case(field.name)


def to_camel_case(name: str) -> str:
    head, *tail = name.split('_')
    return head + ''.join(chunk.capitalize() for chunk in tail)


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, enum.Enum):
        return value.value
    elif isinstance(value, tuple(ATOMIC_TYPES)):
        return value
    elif isinstance(value, dict):
        if all(isinstance(key, str) for key in value.keys()):
            return {key: serialize_value(val) for key, val in value.items()}
        raise ValueError(f'cannot serialize non-string keys of {value!r}')
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(val) for val in value]
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any, record: Optional[type] = None) -> Any:
    if record is None or value is None:
        return value
    elif isinstance(value, list):
        return [record.from_dict(val) for val in value]
    else:
        return record.from_dict(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    '''Serialize a record object to a JSON-ready dictionary.'''
    return serialize_value(obj)


def from_dict(cls: Type[Record], value: Dict[str, Any]) -> Record:
    '''Parse a record object of the given class from a dictionary.

    :param cls: A class decorated with :func:`record_serialization`.
    :param value: A dictionary created by :func:`to_dict`.
    :raises ValueError: If the dictionary does not describe a valid record.
    '''
    return cls.from_dict(value)


def to_json(obj: Any) -> str:
    return json.dumps(to_dict(obj))


def from_json(cls: Type[Record], text: str) -> Record:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f'invalid {cls.__name__} JSON: {e}') from e
    return from_dict(cls, value)
