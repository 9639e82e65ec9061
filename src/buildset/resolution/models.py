"""Pydantic models for build documents.

Three document shapes share the same option-set sections:

* :class:`BuildDocument`: a full, standalone build (the only shape that
  survives resolution),
* :class:`ExtendedDocument`: inherits from one or more builds via ``extends``,
* :class:`PartialDocument`: a reusable ``configuration`` fragment merged into
  other documents via ``include``.

Example YAML::

    board_env: mega2560
    meta:
      stable_name: "ramps-{{marlin_version}}"
      nightly_name: "ramps-nightly-{{current_date}}"
    based_on:
      repo: https://github.com/MarlinFirmware/Configurations.git
      path: config/examples/RAMPS
      stable_branch: release-2.1.2
      nightly_branch: bugfix-2.1.x
    include: common/sensors.yaml
    configuration:
      enable:
        - AUTO_BED_LEVELING_BILINEAR
        - [GRID_MAX_POINTS_X, 5]
      disable:
        - SDSUPPORT

Tags:
    buildset, schema, pydantic, declarative, config-driven

Doc-Types:
    api-reference
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

NonEmptyStr = Annotated[str, Field(min_length=1)]

#: A bare option name, or ``(name, value)`` for enables that carry a value.
OptionEntry = Union[NonEmptyStr, tuple[NonEmptyStr, Any]]

#: One document identity or an ordered list of them.
Reference = Union[NonEmptyStr, Annotated[list[NonEmptyStr], Field(min_length=1)]]

SECTIONS: tuple[str, ...] = ("configuration", "configuration_adv")

ChannelName = Literal["stable", "nightly"]


def option_name(entry: OptionEntry) -> str:
    """Return the identity of an option entry."""
    if isinstance(entry, str):
        return entry
    return entry[0]


def references(value: str | list[str] | None) -> list[str]:
    """Normalize an ``include``/``extends`` value to an ordered list of names."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class Configuration(BaseModel):
    """An enable/disable option set."""

    model_config = ConfigDict(extra="forbid")

    enable: list[OptionEntry] = Field(default_factory=list)
    disable: list[NonEmptyStr] = Field(default_factory=list)

    def enabled_names(self) -> list[str]:
        return [option_name(entry) for entry in self.enable]


class BuildMeta(BaseModel):
    """Artifact names for each release channel."""

    model_config = ConfigDict(extra="forbid")

    stable_name: NonEmptyStr
    nightly_name: NonEmptyStr


class BasedOn(BaseModel):
    """Where the example configuration a build starts from lives."""

    model_config = ConfigDict(extra="forbid")

    repo: NonEmptyStr
    path: NonEmptyStr
    stable_branch: NonEmptyStr
    nightly_branch: NonEmptyStr


class PartialBasedOn(BaseModel):
    """``based_on`` as an extending document may write it: every field optional."""

    model_config = ConfigDict(extra="forbid")

    repo: NonEmptyStr | None = None
    path: NonEmptyStr | None = None
    stable_branch: NonEmptyStr | None = None
    nightly_branch: NonEmptyStr | None = None


class _ConfiguredDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    configuration: Configuration = Field(default_factory=Configuration)
    configuration_adv: Configuration = Field(default_factory=Configuration)

    def section(self, name: str) -> Configuration:
        return getattr(self, name)


class BuildDocument(_ConfiguredDocument):
    """A full build definition; every resolved build has this shape."""

    board_env: NonEmptyStr
    include: Reference | None = None
    active: bool | None = None
    only: ChannelName | None = None
    min_version: str | None = None
    meta: BuildMeta
    based_on: BasedOn


class ExtendedDocument(_ConfiguredDocument):
    """A build that inherits from other builds.

    Only ``meta`` is mandatory: every build must name its own artifacts.
    """

    extends: Reference
    board_env: NonEmptyStr | None = None
    include: Reference | None = None
    active: bool | None = None
    only: ChannelName | None = None
    min_version: str | None = None
    meta: BuildMeta
    based_on: PartialBasedOn | None = None


class PartialDocument(_ConfiguredDocument):
    """A configuration fragment; never part of the resolved build set."""

    partial: Literal[True]
    include: Reference | None = None


AnyDocument = Union[BuildDocument, ExtendedDocument, PartialDocument]


class DocumentKind(str, Enum):
    """Kind tag assigned once by the classifier."""

    FULL = "full"
    EXTENDED = "extended"
    PARTIAL = "partial"


@dataclass
class ClassifiedDocument:
    """A validated document tagged with its kind and storage identity."""

    name: str
    kind: DocumentKind
    document: AnyDocument


__all__ = [
    "SECTIONS",
    "ChannelName",
    "OptionEntry",
    "Reference",
    "option_name",
    "references",
    "Configuration",
    "BuildMeta",
    "BasedOn",
    "PartialBasedOn",
    "BuildDocument",
    "ExtendedDocument",
    "PartialDocument",
    "AnyDocument",
    "DocumentKind",
    "ClassifiedDocument",
]
