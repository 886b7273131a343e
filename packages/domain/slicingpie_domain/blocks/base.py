"""Base classes for report computation blocks.

This module provides the foundation for the blocks architecture:
- Block abstract base class
- BlockContext for passing data between blocks
- BlockExecutor for dependency resolution and execution
- Topological sort for DAG execution order
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from ..logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# Block Context
# =============================================================================

@dataclass
class BlockContext:
    """Context object for passing data between blocks.

    Blocks read their inputs from context and write their outputs to context.

    Example:
        context = BlockContext()
        context.set("engine_snapshot", snapshot)

        EquityBlock().execute(context)

        equity_df = context.get("equity_rows")
    """

    _data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Get value from context.

        Raises:
            KeyError: If key not found in context
        """
        if key not in self._data:
            raise KeyError(f"Key '{key}' not found in context. Available keys: {list(self._data.keys())}")
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())


# =============================================================================
# Block Base Class
# =============================================================================

class Block(ABC):
    """Abstract base class for computation blocks.

    A Block:
    1. Declares its input dependencies (what it reads from context)
    2. Declares its output keys (what it writes to context)
    3. Implements compute logic in execute()

    Blocks are thin: the math lives in slicingpie_domain.engine and blocks
    only reshape engine results into flat DataFrames for presentation.
    """

    @abstractmethod
    def inputs(self) -> List[str]:
        """Context keys this block reads."""

    @abstractmethod
    def outputs(self) -> List[str]:
        """Context keys this block writes."""

    @abstractmethod
    def execute(self, context: BlockContext) -> None:
        """Read inputs from context, compute, write outputs to context.

        Raises:
            KeyError: If required inputs not available in context
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(inputs={self.inputs()}, outputs={self.outputs()})"


# =============================================================================
# Dependency Resolution
# =============================================================================

class CircularDependencyError(Exception):
    """Raised when blocks have circular dependencies."""


def topological_sort(blocks: List[Block]) -> List[Block]:
    """Sort blocks so every producer runs before its consumers.

    Uses Kahn's algorithm. Inputs nobody produces are expected in the
    initial context.

    Raises:
        ValueError: If two blocks declare the same output
        CircularDependencyError: If blocks have circular dependencies

    Example:
        EquityBlock.outputs()    = ["equity_rows", ...]
        ValuationBlock.inputs()  = ["engine_snapshot", "equity_rows"]

        topological_sort([valuation_block, equity_block])
        -> [equity_block, valuation_block]
    """
    output_to_block: Dict[str, Block] = {}
    for block in blocks:
        for output_key in block.outputs():
            if output_key in output_to_block:
                raise ValueError(
                    f"Multiple blocks produce '{output_key}': "
                    f"{output_to_block[output_key]} and {block}"
                )
            output_to_block[output_key] = block

    in_degree: Dict[Block, int] = {block: 0 for block in blocks}
    adjacency: Dict[Block, List[Block]] = {block: [] for block in blocks}

    for block in blocks:
        for input_key in block.inputs():
            if input_key in output_to_block:
                producer = output_to_block[input_key]
                adjacency[producer].append(block)
                in_degree[block] += 1

    queue: List[Block] = [block for block in blocks if in_degree[block] == 0]
    sorted_blocks: List[Block] = []

    while queue:
        current = queue.pop(0)
        sorted_blocks.append(current)

        for neighbor in adjacency[current]:
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    if len(sorted_blocks) != len(blocks):
        remaining = [block for block in blocks if in_degree[block] > 0]
        raise CircularDependencyError(
            f"Circular dependency detected among blocks: {remaining}"
        )

    return sorted_blocks


# =============================================================================
# Block Executor
# =============================================================================

class BlockExecutor:
    """Executes blocks in dependency order.

    Example:
        executor = BlockExecutor([ValuationBlock(), EquityBlock()])
        context = BlockContext()
        context.set("engine_snapshot", snapshot)

        executor.execute(context)

        values_df = context.get("equity_values")
    """

    def __init__(self, blocks: List[Block]):
        self.blocks = blocks
        self._sorted_blocks: Optional[List[Block]] = None

    def execute(self, context: BlockContext) -> BlockContext:
        """Execute all blocks in dependency order.

        Raises:
            CircularDependencyError: If blocks have circular dependencies
            KeyError: If required inputs not available in context
            ValueError: If a block does not write a declared output
        """
        if self._sorted_blocks is None:
            self._sorted_blocks = topological_sort(self.blocks)
            logger.debug("Block execution order: %s", self._sorted_blocks)

        for block in self._sorted_blocks:
            self._validate_inputs(block, context)
            block.execute(context)
            self._validate_outputs(block, context)

        return context

    def _validate_inputs(self, block: Block, context: BlockContext) -> None:
        for input_key in block.inputs():
            if not context.has(input_key):
                raise KeyError(
                    f"Block {block} requires input '{input_key}' but it's not in context. "
                    f"Available keys: {context.keys()}"
                )

    def _validate_outputs(self, block: Block, context: BlockContext) -> None:
        for output_key in block.outputs():
            if not context.has(output_key):
                raise ValueError(
                    f"Block {block} declared output '{output_key}' but didn't write it to context"
                )
