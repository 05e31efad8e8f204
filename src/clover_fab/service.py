"""
Service facade over the fabrication pipeline.

Every operation returns an OperationResult instead of raising, so a UI or
request layer can forward outcomes as plain data. Inputs may be schema
dataclasses or the camelCase dicts emitted upstream; they are parsed and
validated here before reaching the core.

Example::

    from clover_fab.service import FabService

    service = FabService()
    result = service.estimate_quote({"layers": 2, "width": 50, "height": 40})
    if result.success:
        print(result.data["totalPrice"])
    else:
        print(result.error.message)
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Optional, Union

from clover_fab.config import Config
from clover_fab.cost import PricingTable, estimate_quote
from clover_fab.exceptions import GenerationError, ValidationError
from clover_fab.export import GerberPackager
from clover_fab.manufacturers import build_order_url
from clover_fab.orders import OrderRegistry
from clover_fab.results import OperationResult
from clover_fab.schema import BoardSpecs, Design, OrderStatus
from clover_fab.validate import validate_design, validate_specs

logger = logging.getLogger(__name__)

SpecsInput = Union[BoardSpecs, dict]
DesignInput = Union[Design, dict]


def _parse(kind: type, value: Any, operation: str) -> Any:
    """Parse dict input into a schema dataclass."""
    if isinstance(value, kind):
        return value
    if not isinstance(value, dict):
        raise ValidationError(
            [f"expected {kind.__name__} or a mapping, got {type(value).__name__}"],
            operation=operation,
        )
    try:
        return kind.from_dict(value)
    except (KeyError, TypeError, ValueError) as e:
        detail = f"missing field {e}" if isinstance(e, KeyError) else str(e)
        raise ValidationError(
            [f"malformed {kind.__name__}: {detail}"], operation=operation
        ) from e


class FabService:
    """
    Result-returning facade: quotes, Gerber packages, order URLs and orders.

    The composition root owns the configuration, the order registry and the
    output location; the facade keeps no global state.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[OrderRegistry] = None,
        output_root: Optional[Union[str, Path]] = None,
        pricing: Optional[PricingTable] = None,
    ):
        self.config = config or Config()
        self.registry = registry if registry is not None else OrderRegistry()
        self.output_root = Path(output_root) if output_root else Path(self.config.export.output_dir)
        self._pricing = pricing

    @property
    def pricing(self) -> PricingTable:
        if self._pricing is None:
            self._pricing = self.config.pricing_table()
        return self._pricing

    def _packager(self) -> GerberPackager:
        export = self.config.export
        return GerberPackager(
            self.output_root,
            workers=export.workers or None,
            compression_level=export.compression_level,
            keep_layer_files=export.keep_layer_files,
        )

    def _run(self, operation: str, func: Callable[[], Any]) -> OperationResult:
        try:
            return OperationResult.ok(func())
        except Exception as e:
            logger.error(f"{operation} failed: {type(e).__name__}: {getattr(e, 'message', e)}")
            return OperationResult.fail(e, operation)

    def estimate_quote(self, specs: SpecsInput) -> OperationResult:
        """Quote a board. Data: the quote as a camelCase dict."""
        operation = "pcb:get-quote"

        def run():
            parsed = validate_specs(_parse(BoardSpecs, specs, operation), operation)
            return estimate_quote(parsed, self.pricing, self.config.pricing.shipping).to_dict()

        return self._run(operation, run)

    def generate_gerber_package(self, design: DesignInput) -> OperationResult:
        """Write layer files and the ZIP archive. Data: the archive path."""
        operation = "pcb:generate-gerber"

        def run():
            parsed = validate_design(_parse(Design, design, operation), operation)
            return str(self._packager().generate(parsed).archive_path)

        return self._run(operation, run)

    def export_gerber_package(
        self, design: DesignInput, destination: Union[str, Path]
    ) -> OperationResult:
        """Generate the package and copy the archive to ``destination``."""
        operation = "pcb:export-gerber"

        def run():
            parsed = validate_design(_parse(Design, design, operation), operation)
            archive = self._packager().generate(parsed).archive_path
            target = Path(destination)
            if target.is_dir():
                target = target / f"{parsed.file_stem}-gerber.zip"
            try:
                shutil.copyfile(archive, target)
            except OSError as e:
                raise GenerationError(
                    f"Cannot copy archive: {e}",
                    operation=operation,
                    context={"destination": str(target)},
                ) from e
            return str(target)

        return self._run(operation, run)

    def build_order_url(self, specs: SpecsInput) -> OperationResult:
        """Manufacturer quote page URL for the specs. Data: the URL."""
        operation = "pcb:get-order-url"

        def run():
            return build_order_url(validate_specs(_parse(BoardSpecs, specs, operation), operation))

        return self._run(operation, run)

    def create_order(self, design: DesignInput) -> OperationResult:
        """Create a draft order with a quote snapshot. Data: the order dict."""
        operation = "pcb:create-order"

        def run():
            parsed = validate_design(_parse(Design, design, operation), operation)
            quote = estimate_quote(parsed.specs, self.pricing, self.config.pricing.shipping)
            order = self.registry.create(parsed, quote)
            order = self.registry.attach(order.id, order_url=build_order_url(parsed.specs))
            return order.to_dict()

        return self._run(operation, run)

    def list_orders(self) -> OperationResult:
        """All orders, newest first. Data: list of order dicts."""
        return self._run("pcb:list-orders", lambda: [o.to_dict() for o in self.registry.list()])

    def get_order(self, order_id: str) -> OperationResult:
        """Data: the order dict, or None when the id is unknown."""

        def run():
            order = self.registry.get(order_id)
            return order.to_dict() if order is not None else None

        return self._run("pcb:get-order", run)

    def update_order_status(
        self, order_id: str, status: Union[OrderStatus, str]
    ) -> OperationResult:
        """Data: the updated order dict, or None when the id is unknown."""
        operation = "pcb:update-order-status"

        def run():
            try:
                new_status = OrderStatus(status)
            except ValueError as e:
                valid = ", ".join(s.value for s in OrderStatus)
                raise ValidationError(
                    [f"unknown order status {status!r}"],
                    operation=operation,
                    suggestions=[f"Valid statuses: {valid}"],
                ) from e
            order = self.registry.update_status(order_id, new_status)
            return order.to_dict() if order is not None else None

        return self._run(operation, run)
