"""
Adapter catalog - the static-site generators SSGBridge knows about.

Each factory returns a fresh ``AdapterDescriptor``; keyword options
(``binaries``, ``runner``) are forwarded to it.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from ssgbridge.adapters.base import AdapterDescriptor
from ssgbridge.adapters.registry import AdapterRegistry
from ssgbridge.adapters.runner import ProcessRunner
from ssgbridge.catalog.clojure import babashka, cryogen, perun
from ssgbridge.catalog.elixir import nimble_publisher, serum, tableau
from ssgbridge.catalog.haskell import ema, hakyll
from ssgbridge.catalog.julia import documenter, franklin, staticwebpages
from ssgbridge.catalog.jvm import laika, orchid, scalatex
from ssgbridge.catalog.ml import fornax, yocaml
from ssgbridge.catalog.native import marmot, nimrod, publish, reggae
from ssgbridge.catalog.others import coleslaw, wub, zotonic
from ssgbridge.catalog.racket import frog, pollen
from ssgbridge.catalog.rust import cobalt, mdbook, zola
from ssgbridge.validation.config import Config

logger = logging.getLogger(__name__)

AdapterFactory = Callable[..., AdapterDescriptor]

ADAPTER_FACTORIES: Dict[str, AdapterFactory] = {
    "babashka": babashka,
    "cobalt": cobalt,
    "coleslaw": coleslaw,
    "cryogen": cryogen,
    "documenter": documenter,
    "ema": ema,
    "fornax": fornax,
    "franklin": franklin,
    "frog": frog,
    "hakyll": hakyll,
    "laika": laika,
    "marmot": marmot,
    "mdbook": mdbook,
    "nimble_publisher": nimble_publisher,
    "nimrod": nimrod,
    "orchid": orchid,
    "perun": perun,
    "pollen": pollen,
    "publish": publish,
    "reggae": reggae,
    "scalatex": scalatex,
    "serum": serum,
    "staticwebpages": staticwebpages,
    "tableau": tableau,
    "wub": wub,
    "yocaml": yocaml,
    "zola": zola,
    "zotonic": zotonic,
}


def adapter_names() -> List[str]:
    return list(ADAPTER_FACTORIES)


def create_adapter(
    name: str,
    config: Optional[Config] = None,
    runner: Optional[ProcessRunner] = None,
) -> AdapterDescriptor:
    """Instantiate one catalog adapter with its configured binary overrides."""
    factory = ADAPTER_FACTORIES[name]
    adapter = factory(runner=runner)
    if config is not None:
        adapter.binaries.update(config.binaries_for(name, adapter.programs()))
    return adapter


def build_registry(
    config: Optional[Config] = None,
    runner: Optional[ProcessRunner] = None,
) -> AdapterRegistry:
    """
    Register every enabled catalog adapter.

    All adapters share one ``ProcessRunner``. Without a ``config`` every
    adapter is enabled and uses its conventional binary names.
    """
    runner = runner or ProcessRunner()
    registry = AdapterRegistry()
    for name in ADAPTER_FACTORIES:
        if config is not None and not config.is_enabled(name):
            logger.debug("adapter %s disabled by configuration", name)
            continue
        registry.register(create_adapter(name, config=config, runner=runner))
    return registry


__all__ = [
    "ADAPTER_FACTORIES",
    "adapter_names",
    "build_registry",
    "create_adapter",
]
