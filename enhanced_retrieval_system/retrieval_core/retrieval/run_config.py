# Defines RunScope and call-argument normalisation for retrievers
# File: retrieval_core/retrieval/run_config.py

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union, cast
from uuid import UUID

from langchain_core.callbacks import BaseCallbackManager, Callbacks
from langchain_core.callbacks.manager import AsyncCallbackManager, CallbackManager
from langchain_core.runnables import RunnableConfig

from ..callbacks.logging_handler import LoggingCallbackHandler

logger = logging.getLogger(__name__)

CallbackConfigArg = Union[Callbacks, Mapping[str, Any], None]


def parse_callback_config_arg(arg: CallbackConfigArg) -> RunnableConfig:
    """
    Normalise the optional config argument of a retrieval call.

    A bare callback set (a list of handlers or a callback manager) is shorthand
    for ``{"callbacks": arg}``; a mapping is taken as a RunnableConfig.

    Raises:
        TypeError: If arg is none of the accepted shapes.
    """
    if arg is None:
        return {}
    if isinstance(arg, (list, BaseCallbackManager)):
        return {"callbacks": arg}
    if isinstance(arg, Mapping):
        return cast(RunnableConfig, dict(arg))
    raise TypeError(
        f"Retriever config must be a list of callback handlers, a callback manager or a mapping, got {type(arg).__name__}"
    )


@dataclass(frozen=True)
class RunScope:
    """
    Call-scoped and instance-scoped settings for one retrieval run.

    Both sides are handed to the callback manager, which merges them:

    - callbacks: call-scoped handlers are inheritable (child runs see them),
      instance handlers are local to this run. All of them receive the
      retriever events.
    - tags: call-scoped first, then instance tags. A tag given on both
      sides appears once, in its instance-side position.
    - metadata: both mappings are passed on. On a key present in both, the
      instance value is applied last and is what handlers see. Such keys are
      reported by ``metadata_collisions`` and logged at DEBUG.
    """
    call_callbacks: Callbacks = None
    instance_callbacks: Callbacks = None
    call_tags: Tuple[str, ...] = ()
    instance_tags: Tuple[str, ...] = ()
    call_metadata: Mapping[str, Any] = field(default_factory=dict)
    instance_metadata: Mapping[str, Any] = field(default_factory=dict)
    verbose: bool = False
    run_name: Optional[str] = None
    run_id: Optional[UUID] = None

    @classmethod
    def for_call(cls, retriever: Any, config: RunnableConfig) -> "RunScope":
        """Combine a normalised call config with a retriever's own fields."""
        return cls(
            call_callbacks=config.get("callbacks"),
            instance_callbacks=retriever.callbacks,
            call_tags=tuple(config.get("tags") or ()),
            instance_tags=tuple(retriever.tags or ()),
            call_metadata=dict(config.get("metadata") or {}),
            instance_metadata=dict(retriever.metadata or {}),
            verbose=bool(retriever.verbose),
            run_name=config.get("run_name"),
            run_id=config.get("run_id"),
        )

    def merged_tags(self) -> List[str]:
        """The tag list the callback manager will report for this run."""
        tags: List[str] = []
        for tag in self.call_tags + self.instance_tags:
            if tag in tags:
                tags.remove(tag)
            tags.append(tag)
        return tags

    def metadata_collisions(self) -> List[str]:
        return sorted(set(self.call_metadata) & set(self.instance_metadata))

    def local_callbacks(self) -> Callbacks:
        """Instance handlers, plus a LoggingCallbackHandler when verbose."""
        if not self.verbose:
            return self.instance_callbacks
        if isinstance(self.instance_callbacks, BaseCallbackManager):
            handlers = list(self.instance_callbacks.handlers)
        else:
            handlers = list(self.instance_callbacks or [])
        if not any(isinstance(h, LoggingCallbackHandler) for h in handlers):
            handlers.append(LoggingCallbackHandler())
        return handlers

    def _configure_kwargs(self) -> Dict[str, Any]:
        logger.debug(f"Run tags: {self.merged_tags()}")
        collisions = self.metadata_collisions()
        if collisions:
            logger.debug(f"Metadata keys set both per call and on the retriever: {collisions}. Retriever values apply.")
        return dict(
            inheritable_callbacks=self.call_callbacks,
            local_callbacks=self.local_callbacks(),
            verbose=self.verbose,
            inheritable_tags=list(self.call_tags),
            local_tags=list(self.instance_tags),
            inheritable_metadata=dict(self.call_metadata),
            local_metadata=dict(self.instance_metadata),
        )

    def configure(self) -> CallbackManager:
        """Build the run-scoped dispatcher for a synchronous call."""
        return CallbackManager.configure(**self._configure_kwargs())

    def aconfigure(self) -> AsyncCallbackManager:
        """Build the run-scoped dispatcher for an asynchronous call."""
        return AsyncCallbackManager.configure(**self._configure_kwargs())
