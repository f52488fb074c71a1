"""Domain models for the delivery record decoder.

This package contains the typed row, fragment and record classes produced by
the decoders, plus the result/error models used by the batch layer.
"""

from .delivery_record import DeliveryRecord
from .error_record import ErrorRecord
from .fragments import CargoFragment, OrderFragment, RouteFragment
from .processing_result import FileStat, ProcessingResult, RowOutcome
from .raw_row import Cell, RawRow, RowShapeError, to_cell

__all__ = [
    # Row boundary
    "Cell",
    "RawRow",
    "RowShapeError",
    "to_cell",
    # Decoded data
    "CargoFragment",
    "OrderFragment",
    "RouteFragment",
    "DeliveryRecord",
    # Processing models
    "ErrorRecord",
    "FileStat",
    "ProcessingResult",
    "RowOutcome",
]
