"""
Random Source - Seed resolution for reproducible runs
"""
import time
import random
import logging
from typing import Optional, Tuple
from ..models import SpecConf

logger = logging.getLogger(__name__)


def new_seed() -> int:
    """Pick a seed from the current time"""
    return time.time_ns()


def resolve_random(conf: SpecConf) -> Tuple[random.Random, Optional[int]]:
    """
    Return the RNG for a run and the seed it was built from.

    A caller supplied RNG wins and its seed is whatever the caller put in
    conf.seed. Otherwise a new RNG is built from conf.seed, or from a clock
    based seed that is logged so the run can be replayed.
    """
    if conf.rand is not None:
        return conf.rand, conf.seed

    seed = conf.seed
    if seed is None:
        seed = new_seed()
        logger.info(f"No RNG configured - using random seed: {seed} (use to reproduce)")

    return random.Random(seed), seed
