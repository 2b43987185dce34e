#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Parallel processing of many asset references.

Each reference runs its own resolve -> transform -> publish sequence; the
only shared resources are the cache store and the output tree, both written
atomically.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from tqdm import tqdm

from .asset import Asset
from .errors import AssetError, ConfigError

logger = logging.getLogger(__name__)

Reference = Union[str, Sequence[str]]


def reference_label(reference: Reference) -> str:
    return reference if isinstance(reference, str) else "+".join(reference)


def _build_one(context, reference: Reference, options: Mapping[str, Any]) -> str:
    return str(Asset(context, reference, **options))


def build_assets(
    context,
    references: Iterable[Reference],
    workers: int = 4,
    progress: bool = False,
    options: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Optional[str]]:
    """Build and publish every reference; returns ``{label: public URL}``.

    A reference that fails is logged and mapped to None; the others still
    complete.
    """
    options = dict(options or {})
    references = list(references)
    results: Dict[str, Optional[str]] = {}

    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        futures = {
            pool.submit(_build_one, context, ref, options): reference_label(ref)
            for ref in references
        }
        done = as_completed(futures)
        if progress:
            done = tqdm(done, total=len(futures), desc="Assets", unit="asset")
        for fut in done:
            label = futures[fut]
            try:
                results[label] = fut.result()
            except (AssetError, ConfigError) as e:
                logger.error("Asset %s failed: %s", label, e)
                results[label] = None

    logger.info("Built %d/%d assets", sum(1 for v in results.values() if v is not None), len(results))
    return results
