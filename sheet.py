import logging

import requests

logger = logging.getLogger(__name__)


def load_feed(config, debug_log=None):
    """
    Downloads the pericope spreadsheet and returns its rows (`feed.entry`).
    Any failure yields an empty list so the report still renders.
    """
    try:
        response = requests.get(config.feed_url)
        if response.status_code != 200:
            logger.warning("Feed request failed with HTTP %s", response.status_code)
            if debug_log is not None: debug_log.append(f"[feed] HTTP {response.status_code}, no entries")
            return []
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Feed request failed: %s", e)
        if debug_log is not None: debug_log.append(f"[feed] Error: {e}")
        return []

    rows = data.get('feed', {}).get('entry', [])
    logger.info("Loaded %d rows from %s", len(rows), config.feed_url)
    return rows
