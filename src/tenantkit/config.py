"""Pipeline configuration.

Frozen dataclass built once and handed to the ``Dispatcher``. Nothing
here changes after the dispatcher is constructed.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tenantkit.context import HandlerResult
from tenantkit.middleware.cors import CORSConfig

if TYPE_CHECKING:
    from tenantkit.metrics import MetricsSink
    from tenantkit.server.transform import TransformContext

type ResponseTransformer = Callable[[TransformContext], HandlerResult | Awaitable[HandlerResult]]


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Dispatcher configuration.

    ``base_path`` is prefixed to every route template and to the health
    endpoint. ``debug`` turns on one INFO log line per request.
    """

    base_path: str = ""
    cors: CORSConfig = field(default_factory=CORSConfig)
    debug: bool = False
    response_transformer: ResponseTransformer | None = None
    metrics: MetricsSink | None = None
