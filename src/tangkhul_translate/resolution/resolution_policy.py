"""
Resolution policy for the match cascade.

Implements the escalation order: cache → exact → consensus → similarity → partial.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..exceptions import StorageUnavailable
from ..schemas import TranslationResult
from .match_stage import MatchQuery, MatchStage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageOutcome:
    """The stage that resolved a query and what it returned."""
    stage: MatchStage
    result: TranslationResult


class ResolutionPolicy:
    """
    Policy for escalating through match stages.
    
    Tries stages in order until one returns a result; no stage is retried and
    no stage runs once an earlier one has succeeded. A storage failure is a
    miss for that stage unless the stage is marked fatal_on_storage_error.
    """

    def __init__(self, stages: List[MatchStage]):
        """
        Initialize resolution policy.
        
        :param stages: Stages to try in order (e.g., [CacheStage, ExactMatchStage, ...])
        """
        if not stages:
            raise ValueError("At least one stage must be provided")
        
        self._stages = list(stages)

    @property
    def stages(self) -> List[MatchStage]:
        return list(self._stages)

    def run(self, query: MatchQuery) -> Optional[StageOutcome]:
        """
        Run the cascade for one query.
        
        :param query: Normalized query
        :return: StageOutcome of the first successful stage, or None if all missed
        :raises StorageUnavailable: If a fatal stage cannot reach its store
        """
        for stage in self._stages:
            try:
                result = stage.try_match(query)
            except StorageUnavailable as e:
                if stage.fatal_on_storage_error:
                    logger.error(f"Stage '{stage.name}' storage failure, aborting: {e}", exc_info=True)
                    raise
                logger.warning(f"Stage '{stage.name}' storage failure, treating as miss: {e}", exc_info=True)
                continue

            if result is None:
                logger.debug(f"Stage '{stage.name}' missed for '{query.normalized_text}'")
                continue

            logger.info(
                f"Stage '{stage.name}' resolved '{query.normalized_text}' "
                f"({query.source_lang} → {query.target_lang}), confidence={result.confidence_score}"
            )
            return StageOutcome(stage=stage, result=result)

        return None
