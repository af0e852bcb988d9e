"""Function composition for assembling pipelines."""

from lazy_result.compose.pipe import compose, flow, identity, pipe

__all__ = ['compose', 'flow', 'identity', 'pipe']
