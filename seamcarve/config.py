"""Run configuration for the command-line tool."""

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidRequestError


@dataclass
class CarveConfig:
    """Settings for a single resize run."""

    # Number of vertical seams to remove
    columns: int

    # Output naming: <input stem><output_suffix>.<output_format>
    output_suffix: str = "_new"
    output_format: str = "ppm"
    output: Optional[str] = None

    # torch device for the carving loop
    device: str = "cpu"

    log_level: str = "INFO"

    def __post_init__(self):
        if self.columns < 0:
            raise InvalidRequestError(f"Column count must be non-negative, got {self.columns}")

    @classmethod
    def from_args(cls, args):
        """Build a config from parsed argparse arguments."""
        return cls(
            columns=args.columns,
            output=args.output,
            device=args.device,
            log_level="DEBUG" if args.verbose else "INFO",
        )
