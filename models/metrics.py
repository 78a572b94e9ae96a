import logging
import threading
import time
from collections import deque
from datetime import datetime

logger = logging.getLogger(__name__)

_lock = threading.Lock()


def _fresh_metrics():
    return {
        'total_reads': 0,
        'total_writes': 0,
        'total_appends': 0,
        'total_cells': 0,
        'store_errors': 0,
        'rate_limit_errors': 0,
        'notifications_sent': 0,
        'notifications_failed': 0,
        'recent_calls': deque(maxlen=100),
    }


# Metrics storage
_metrics = _fresh_metrics()


def log_api_call(operation, sheet_name, cells=None):
    """Log a store call for metrics. operation is 'read', 'write' or 'append'"""
    now = time.time()
    call_record = {
        'time': now,
        'timestamp': datetime.now().strftime('%H:%M:%S'),
        'operation': operation,
        'sheet': sheet_name,
        'cells': cells,
    }
    with _lock:
        _metrics['recent_calls'].append(call_record)
        if operation == 'read':
            _metrics['total_reads'] += 1
        elif operation == 'append':
            _metrics['total_appends'] += 1
        else:
            _metrics['total_writes'] += 1
        if cells:
            _metrics['total_cells'] += cells

        one_min_ago = now - 60
        calls_last_min = sum(1 for c in _metrics['recent_calls'] if c['time'] > one_min_ago)

    cells_str = f" | Cells: {cells}" if cells else ""
    logger.info("[SHEETS] %s '%s'%s | Last 60s: %d calls",
                operation.upper(), sheet_name, cells_str, calls_last_min)


def log_store_error(sheet_name, operation):
    with _lock:
        _metrics['store_errors'] += 1
    logger.error("[SHEETS] %s failed for '%s'", operation.upper(), sheet_name)


def log_rate_limit_error(sheet_name):
    """Log a rate limit error"""
    with _lock:
        _metrics['rate_limit_errors'] += 1
    logger.warning("[SHEETS] RATE LIMIT for '%s'", sheet_name)


def log_notification(delivered):
    key = 'notifications_sent' if delivered else 'notifications_failed'
    with _lock:
        _metrics[key] += 1


def reset_metrics():
    """Reset all counters, used by tests and the load test"""
    global _metrics
    with _lock:
        _metrics = _fresh_metrics()


def get_metrics():
    """Get current store and notification metrics"""
    now = time.time()
    one_min_ago = now - 60
    with _lock:
        calls_last_min = [dict(c) for c in _metrics['recent_calls'] if c['time'] > one_min_ago]
        snapshot = {key: value for key, value in _metrics.items() if key != 'recent_calls'}

    snapshot['store_calls_last_minute'] = len(calls_last_min)
    snapshot['recent_calls'] = calls_last_min
    return snapshot
