"""Immutable resource declarations and their per-kind builders."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .errors import InvalidConfigurationError, InvalidInputError


class ResourceKind(str, Enum):
  """Kinds of resource the composer can declare."""

  STORAGE_BUCKET = "storage-bucket"
  CDN_DISTRIBUTION = "cdn-distribution"
  DNS_RECORD = "dns-record"
  CERTIFICATE = "certificate"
  IDENTITY = "identity"
  HOSTED_ZONE = "hosted-zone"
  CONTENT_DEPLOYMENT = "content-deployment"


@dataclass(frozen=True)
class Ref:
  """Reference from a config value to another declaration by name."""

  name: str
  attribute: str | None = None

  def to_dict(self) -> dict[str, Any]:
    return {"ref": self.name, "attribute": self.attribute}


def _freeze(value: Any) -> Any:
  if isinstance(value, Mapping):
    return MappingProxyType({str(k): _freeze(v) for k, v in value.items()})
  if isinstance(value, (set, frozenset)):
    return frozenset(_freeze(v) for v in value)
  if isinstance(value, (list, tuple)):
    return tuple(_freeze(v) for v in value)
  return value


def _thaw(value: Any) -> Any:
  if isinstance(value, Ref):
    return value.to_dict()
  if isinstance(value, Mapping):
    return {k: _thaw(v) for k, v in value.items()}
  if isinstance(value, frozenset):
    return sorted((_thaw(v) for v in value), key=repr)
  if isinstance(value, tuple):
    return [_thaw(v) for v in value]
  return value


def _collect_refs(value: Any) -> Iterable[Ref]:
  if isinstance(value, Ref):
    yield value
  elif isinstance(value, Mapping):
    for item in value.values():
      yield from _collect_refs(item)
  elif isinstance(value, (tuple, frozenset)):
    for item in value:
      yield from _collect_refs(item)


# Options every declaration of a kind must carry, with their expected type.
# A plain string for `zone` or `certificate` names an existing zone or
# certificate ARN instead of a declaration.
REQUIRED_OPTIONS: dict[ResourceKind, dict[str, type | tuple[type, ...]]] = {
  ResourceKind.STORAGE_BUCKET: {"bucket_name": str},
  ResourceKind.IDENTITY: {"comment": str},
  ResourceKind.HOSTED_ZONE: {"zone_name": str},
  ResourceKind.CERTIFICATE: {"domain_name": str, "zone": (Ref, str)},
  ResourceKind.CDN_DISTRIBUTION: {
    "origin_bucket": Ref,
    "certificate": (Ref, str),
    "aliases": tuple,
  },
  ResourceKind.DNS_RECORD: {"zone": (Ref, str), "target": Ref, "record_name": str},
  ResourceKind.CONTENT_DEPLOYMENT: {"source_path": str, "bucket": Ref},
}


def _validate(kind: ResourceKind, config: Mapping[str, Any]) -> None:
  for option, expected in REQUIRED_OPTIONS[kind].items():
    value = config.get(option)
    if value is None:
      raise InvalidConfigurationError(option, f"required for {kind.value}")
    if not isinstance(value, expected):
      types = expected if isinstance(expected, tuple) else (expected,)
      names = " or ".join(t.__name__ for t in types)
      raise InvalidConfigurationError(
        option, f"expected {names}, got {type(value).__name__}"
      )
    if isinstance(value, (str, tuple)) and not value:
      raise InvalidConfigurationError(option, "must not be empty")


@dataclass(frozen=True)
class ResourceDeclaration:
  """Desired state of a single resource.

  Declarations are value objects: the config is frozen on construction and
  cross-resource links are expressed as `Ref` values or `depends_on` names,
  never as handles to realised resources.
  """

  kind: ResourceKind
  name: str
  config: Mapping[str, Any] = field(default_factory=dict, hash=False)
  depends_on: frozenset[str] = frozenset()

  def __post_init__(self) -> None:
    if not isinstance(self.name, str) or not self.name:
      raise InvalidInputError("declaration name must be a non-empty string")
    try:
      kind = ResourceKind(self.kind)
    except ValueError as e:
      raise InvalidConfigurationError("kind", f"unknown resource kind {self.kind!r}") from e
    config = _freeze(self.config)
    depends_on = frozenset(self.depends_on)
    for dependency in depends_on:
      if not isinstance(dependency, str) or not dependency:
        raise InvalidConfigurationError("depends_on", "names must be non-empty strings")
    _validate(kind, config)

    object.__setattr__(self, "kind", kind)
    object.__setattr__(self, "config", config)
    object.__setattr__(self, "depends_on", depends_on)

  def references(self) -> frozenset[str]:
    """Names of the declarations referenced from within config."""
    return frozenset(ref.name for ref in _collect_refs(self.config))

  def to_dict(self) -> dict[str, Any]:
    """JSON-ready form that keeps identity and the full config payload."""
    return {
      "kind": self.kind.value,
      "name": self.name,
      "config": _thaw(self.config),
      "depends_on": sorted(self.depends_on),
    }


def storage_bucket(
  name: str,
  *,
  bucket_name: str,
  index_document: str = "index.html",
  error_document: str = "error.html",
  block_public_access: bool = True,
  removal_policy: str = "retain",
  read_access: Ref | None = None,
  depends_on: Iterable[str] = (),
) -> ResourceDeclaration:
  """Declare a private bucket serving website documents.

  Args:
    name: Declaration name
    bucket_name: Physical bucket name (the site domain for website hosting)
    read_access: Identity granted s3:GetObject on every object
  """
  config: dict[str, Any] = {
    "bucket_name": bucket_name,
    "index_document": index_document,
    "error_document": error_document,
    "block_public_access": block_public_access,
    "removal_policy": removal_policy,
  }
  if read_access is not None:
    config["read_access"] = read_access
  return ResourceDeclaration(
    ResourceKind.STORAGE_BUCKET, name, config, frozenset(depends_on)
  )


def identity(
  name: str, *, comment: str | None = None, depends_on: Iterable[str] = ()
) -> ResourceDeclaration:
  """Declare a CDN origin access identity."""
  return ResourceDeclaration(
    ResourceKind.IDENTITY,
    name,
    {"comment": comment if comment is not None else f"OAI for {name}"},
    frozenset(depends_on),
  )


def hosted_zone(
  name: str,
  *,
  zone_name: str,
  zone_id: str | None = None,
  depends_on: Iterable[str] = (),
) -> ResourceDeclaration:
  """Declare an existing hosted zone, looked up by name unless its id is known."""
  config: dict[str, Any] = {"zone_name": zone_name}
  if zone_id:
    config["zone_id"] = zone_id
  return ResourceDeclaration(
    ResourceKind.HOSTED_ZONE, name, config, frozenset(depends_on)
  )


def certificate(
  name: str,
  *,
  domain_name: str,
  zone: Ref | str,
  subject_alternative_names: Iterable[str] = (),
  depends_on: Iterable[str] = (),
) -> ResourceDeclaration:
  """Declare a DNS-validated TLS certificate."""
  return ResourceDeclaration(
    ResourceKind.CERTIFICATE,
    name,
    {
      "domain_name": domain_name,
      "zone": zone,
      "subject_alternative_names": list(subject_alternative_names),
    },
    frozenset(depends_on),
  )


DEFAULT_ERROR_RESPONSES: tuple[dict[str, Any], ...] = (
  {
    "error_code": 403,
    "response_code": 200,
    "response_page_path": "/index.html",
    "error_caching_min_ttl": 10,
  },
  {
    "error_code": 400,
    "response_code": 200,
    "response_page_path": "/index.html",
    "error_caching_min_ttl": 10,
  },
)


def cdn_distribution(
  name: str,
  *,
  origin_bucket: Ref,
  certificate: Ref | str,
  aliases: Iterable[str],
  origin_identity: Ref | None = None,
  default_root_object: str = "index.html",
  compress: bool = True,
  allowed_methods: str = "GET_HEAD_OPTIONS",
  minimum_protocol_version: str = "TLSv1.2_2021",
  ssl_method: str = "sni-only",
  error_responses: Iterable[Mapping[str, Any]] = DEFAULT_ERROR_RESPONSES,
  depends_on: Iterable[str] = (),
) -> ResourceDeclaration:
  """Declare an HTTPS-only CDN distribution in front of a bucket.

  Error responses map origin errors (e.g., 403 for a missing key) to a page
  served with another status, which lets single-page apps route client side.
  """
  config: dict[str, Any] = {
    "origin_bucket": origin_bucket,
    "certificate": certificate,
    "aliases": list(aliases),
    "default_root_object": default_root_object,
    "compress": compress,
    "allowed_methods": allowed_methods,
    "minimum_protocol_version": minimum_protocol_version,
    "ssl_method": ssl_method,
    "error_responses": list(error_responses),
  }
  if origin_identity is not None:
    config["origin_identity"] = origin_identity
  return ResourceDeclaration(
    ResourceKind.CDN_DISTRIBUTION, name, config, frozenset(depends_on)
  )


def dns_record(
  name: str,
  *,
  zone: Ref | str,
  target: Ref,
  record_name: str,
  record_type: str = "A",
  depends_on: Iterable[str] = (),
) -> ResourceDeclaration:
  """Declare an alias record pointing a name at a distribution."""
  if record_type not in ("A", "AAAA"):
    raise InvalidConfigurationError("record_type", f"unsupported alias type {record_type!r}")
  return ResourceDeclaration(
    ResourceKind.DNS_RECORD,
    name,
    {
      "zone": zone,
      "target": target,
      "record_name": record_name,
      "record_type": record_type,
    },
    frozenset(depends_on),
  )


def content_deployment(
  name: str,
  *,
  source_path: str,
  bucket: Ref,
  distribution: Ref | None = None,
  invalidation_paths: Iterable[str] = ("/*",),
  prune: bool = True,
  depends_on: Iterable[str] = (),
) -> ResourceDeclaration:
  """Declare an upload of pre-built site files into a bucket."""
  config: dict[str, Any] = {
    "source_path": source_path,
    "bucket": bucket,
    "prune": prune,
  }
  if distribution is not None:
    config["distribution"] = distribution
    config["invalidation_paths"] = list(invalidation_paths)
  return ResourceDeclaration(
    ResourceKind.CONTENT_DEPLOYMENT, name, config, frozenset(depends_on)
  )
