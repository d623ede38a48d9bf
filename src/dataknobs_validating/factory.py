"""Factory classes for building validators and schemas from configuration."""

import logging
from collections.abc import Mapping
from typing import Any

from dataknobs_common.exceptions import ConfigurationError
from dataknobs_config import FactoryBase

from .comparisons import Eq, Gt, Gte, In, Lt, Lte, Match, Ne, Nin, Range
from .fields import F, ItemRef, attr
from .schema import Schema
from .validators import All, Any as AnyOf, Assert, Len, Nested, Nonzero, Not, Validator

logger = logging.getLogger(__name__)


class ValidatorFactory(FactoryBase):
    """Factory for creating validators from configuration.

    Configuration Options:
        type (str): Validator type (see below)
        msg (str): Optional custom message
        validators (list): Sub-validator definitions for composites
        min, max: Bounds for ``len`` and ``range``
        value: Operand for ``eq``, ``ne``, ``gt``, ``gte``, ``lt``, ``lte``
        values (list): Operands for ``in`` and ``nin``
        pattern (str): Regular expression for ``match``
        condition (bool): Fixed outcome for ``assert``

    Validator Types:
        nonzero, len, assert, all (and), any (or), not,
        eq, ne, gt, gte, lt, lte, range, in, nin, match

    Example Configuration:
        validators:
          - name: username
            factory: validator
            type: all
            validators:
              - type: nonzero
              - type: len
                min: 3
                max: 20
              - type: match
                pattern: "^[a-zA-Z0-9_]+$"
    """

    _COMPARISONS = {
        "eq": Eq,
        "ne": Ne,
        "gt": Gt,
        "gte": Gte,
        "lt": Lt,
        "lte": Lte,
    }

    # keys accepted by every type; name and factory come from the config system
    _COMMON_KEYS = frozenset({"type", "msg", "name", "factory"})

    _ALLOWED_KEYS: dict[str, frozenset[str]] = {
        "nonzero": frozenset(),
        "len": frozenset({"min", "max"}),
        "assert": frozenset({"condition"}),
        "all": frozenset({"validators"}),
        "and": frozenset({"validators"}),
        "any": frozenset({"validators"}),
        "or": frozenset({"validators"}),
        "not": frozenset({"validators"}),
        "range": frozenset({"min", "max"}),
        "in": frozenset({"values"}),
        "nin": frozenset({"values"}),
        "match": frozenset({"pattern"}),
        **{name: frozenset({"value"}) for name in ("eq", "ne", "gt", "gte", "lt", "lte")},
    }

    def create(self, **config) -> Validator:
        """Create a Validator instance from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Validator instance

        Raises:
            ConfigurationError: If the type is missing or unknown
        """
        validator_type = str(config.get("type", "")).lower()
        msgs = [config["msg"]] if config.get("msg") is not None else []
        self._warn_unknown_keys(validator_type, config)

        if validator_type == "nonzero":
            return Nonzero(*msgs)

        elif validator_type == "len":
            self._require_bounds(validator_type, config)
            return Len(config["min"], config["max"], *msgs)

        elif validator_type == "assert":
            return Assert(bool(config.get("condition", False)), *msgs)

        elif validator_type in ("all", "and"):
            return All(*self._build_many(config))

        elif validator_type in ("any", "or"):
            return AnyOf(*self._build_many(config))

        elif validator_type == "not":
            sub_configs = config.get("validators", [])
            if len(sub_configs) != 1:
                raise ConfigurationError(
                    "Validator 'not' requires exactly one sub-validator",
                    context={"validators": len(sub_configs)},
                )
            return Not(self.create(**sub_configs[0]), *msgs)

        elif validator_type in self._COMPARISONS:
            if "value" not in config:
                raise ConfigurationError(
                    f"Validator '{validator_type}' requires a 'value'",
                    context={"type": validator_type},
                )
            return self._COMPARISONS[validator_type](config["value"], *msgs)

        elif validator_type == "range":
            self._require_bounds(validator_type, config)
            return Range(config["min"], config["max"], *msgs)

        elif validator_type == "in":
            return In(*config.get("values", []), msg=config.get("msg"))

        elif validator_type == "nin":
            return Nin(*config.get("values", []), msg=config.get("msg"))

        elif validator_type == "match":
            pattern = config.get("pattern")
            if not pattern:
                raise ConfigurationError(
                    "Validator 'match' requires a 'pattern'",
                    context={"type": validator_type},
                )
            return Match(pattern, *msgs)

        raise ConfigurationError(
            f"Unknown validator type: {validator_type or '<missing>'}",
            context={"type": validator_type},
        )

    def _warn_unknown_keys(self, validator_type: str, config: dict[str, Any]) -> None:
        """Log configuration keys the validator type does not use."""
        allowed = self._ALLOWED_KEYS.get(validator_type)
        if allowed is None:
            return
        unknown = sorted(set(config) - allowed - self._COMMON_KEYS)
        if unknown:
            logger.warning(
                f"Unknown configuration keys for validator '{validator_type}': {', '.join(unknown)}"
            )

    def _require_bounds(self, validator_type: str, config: dict[str, Any]) -> None:
        if config.get("min") is None or config.get("max") is None:
            raise ConfigurationError(
                f"Validator '{validator_type}' requires 'min' and 'max'",
                context={"type": validator_type},
            )

    def _build_many(self, config: dict[str, Any]) -> list[Validator]:
        """Build sub-validators of a composite, recursively."""
        sub_configs = config.get("validators", [])
        logger.debug(f"Building {config.get('type')} over {len(sub_configs)} validators")
        return [self.create(**sub_config) for sub_config in sub_configs]


class SchemaFactory(FactoryBase):
    """Factory for creating schemas over an object from configuration.

    Configuration Options:
        target (object): Object (or mapping) holding the values to validate
        fields (dict): Field name to a validator definition, a list of
            definitions (combined with ``all``), or ``{"nested": {...}}``
            describing the fields of the attribute's value

    Example Configuration:
        fields:
          name:
            - type: nonzero
            - type: len
              min: 1
              max: 5
          address:
            nested:
              city:
                type: nonzero
    """

    def __init__(self, validator_factory: ValidatorFactory | None = None):
        self.validator_factory = validator_factory or ValidatorFactory()

    def create(self, **config) -> Schema:
        """Create a Schema instance from configuration.

        Args:
            **config: Schema configuration

        Returns:
            Schema instance

        Raises:
            ConfigurationError: If no target is given
        """
        if "target" not in config:
            raise ConfigurationError("Schema configuration requires a 'target'")
        return self._build_schema(config["target"], config.get("fields", {}))

    def _build_schema(self, target: Any, fields: dict[str, Any]) -> Schema:
        schema = Schema()
        for name, field_config in fields.items():
            if isinstance(target, Mapping):
                ref = ItemRef(target, name)
            else:
                ref = attr(target, name)
            schema[F(name, ref)] = self._build_field_validator(ref.get(), field_config)
        logger.debug(f"Built schema with fields: {', '.join(schema.names())}")
        return schema

    def _build_field_validator(self, value: Any, field_config: Any) -> Validator:
        if isinstance(field_config, list):
            return All(*[self.validator_factory.create(**c) for c in field_config])
        if isinstance(field_config, dict) and "nested" in field_config:
            return Nested(self._build_schema(value, field_config["nested"]))
        if isinstance(field_config, dict):
            return self.validator_factory.create(**field_config)
        raise ConfigurationError(
            "Field configuration must be a mapping or a list of mappings",
            context={"config": repr(field_config)},
        )


# Create singleton instances for registration
validator_factory = ValidatorFactory()
schema_factory = SchemaFactory(validator_factory)
