"""lazy-result: lazy, error-aware async effects for Python 3.12+.

A service is a composed function, not a stateful object: lift one fallible
async call with `try_catch` (or `@service`), thread it through combinators,
and invoke the result once at the edge of the program.

Flat imports (preferred):
    from lazy_result import Ok, Err, Result, Task, TaskResult, try_catch
    from lazy_result import pipe, flow, op, service, decoder

Submodule imports (for organization):
    from lazy_result.result import map, match, get_or_else
    from lazy_result import combinators
    from lazy_result.errors import ErrorKind, ServiceError
"""

# Combinators (namespace imports)
from lazy_result import combinators, op, result

# Configuration and logging
from lazy_result._config import Config, from_env, init
from lazy_result._logging import configure_logging, get_logger

# Combinators (direct imports)
from lazy_result.combinators import (
    chain,
    sequence,
    sequence_concurrent,
    timeout,
    traverse,
)

# Composition
from lazy_result.compose import compose, flow, identity, pipe

# Decoding
from lazy_result.decode import decoder

# Decorators
from lazy_result.decorators import service

# Errors
from lazy_result.errors import ErrorKind, ServiceError, ServiceException, on_error

# Instrumentation
from lazy_result.instrument import traced

# Result
from lazy_result.result import (
    Err,
    Ok,
    Result,
    attempt,
    failure,
    from_predicate,
    success,
)

# Deferred computations
from lazy_result.task import Task, defer, invoke
from lazy_result.task_result import TaskResult, fail, from_throwing, pure, try_catch

__all__ = [
    'Config',
    'Err',
    'ErrorKind',
    'Ok',
    'Result',
    'ServiceError',
    'ServiceException',
    'Task',
    'TaskResult',
    'attempt',
    'chain',
    'combinators',
    'compose',
    'configure_logging',
    'decoder',
    'defer',
    'fail',
    'failure',
    'flow',
    'from_env',
    'from_predicate',
    'from_throwing',
    'get_logger',
    'identity',
    'init',
    'invoke',
    'on_error',
    'op',
    'pipe',
    'pure',
    'result',
    'sequence',
    'sequence_concurrent',
    'service',
    'success',
    'timeout',
    'traced',
    'traverse',
]
