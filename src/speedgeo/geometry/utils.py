"""
utils.py

Small numeric and logging helpers shared by the geometry modules.

The public helpers:
- `limit_to(value, low, high)` : clamp a value into a closed range
- `is_between(value, low, high)` : closed range check
- `safe_log_exception(msg, exc, **ctx)` : logs exceptions robustly

"""

from typing import Any
import sys
import logging

logger = logging.getLogger(__name__)


def limit_to(value: float, low: float, high: float) -> float:
	"""Return `value` clamped to [low, high]."""
	return max(low, min(high, value))


def is_between(value: float, low: float, high: float) -> bool:
	"""True if low <= value <= high."""
	return low <= value <= high


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
	"""Log an exception robustly.

	Attempts to call `logger.error` with the exception attached. If logging
	fails for any reason, falls back to writing a compact message to
	`sys.stderr`.
	"""
	try:
		if ctx:
			ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
			logger.error('%s | %s | %s', msg, exc, ctx_s, exc_info=exc)
		else:
			logger.error('%s | %s', msg, exc, exc_info=exc)
	except Exception:
		# Minimal fallback: write a compact failure message to stderr.
		try:
			sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')
		except Exception:
			pass
