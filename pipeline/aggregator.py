from typing import Callable, Dict, List, Optional
import asyncio
import logging

from models.job import RawJobRecord
from models.request import SourceQuery
from sources.base import BaseSource


async def search_with_timeout(source: BaseSource, query: SourceQuery, timeout: float) -> List[RawJobRecord]:
    """Run one source with a timeout; a slow or failing source contributes nothing"""
    try:
        return await asyncio.wait_for(source.search(query), timeout=timeout)
    except asyncio.TimeoutError:
        logging.error(f"Source {source.name} timed out after {timeout} seconds")
        return []
    except Exception as e:
        logging.error(f"Error in {source.name} source: {str(e)}")
        return []


async def aggregate_jobs(sources: Dict[str, BaseSource], query: SourceQuery,
                         timeout_for: Optional[Callable[[str], float]] = None,
                         default_timeout: float = 20) -> List[RawJobRecord]:
    """
    Query every applicable source concurrently and concatenate the results

    Results are concatenated in the sources' registration order, whatever
    order they finish in.

    Args:
        sources: Registered sources keyed by name, in priority order
        query: The search criteria
        timeout_for: Optional per-source timeout lookup
        default_timeout: Timeout when no lookup is given

    Returns:
        All raw records from all sources
    """
    active = {name: source for name, source in sources.items() if source.applies_to(query.location)}
    skipped = [name for name in sources if name not in active]
    if skipped:
        logging.info(f"Skipping sources for '{query.location}': {', '.join(skipped)}")

    tasks = []
    for name, source in active.items():
        timeout = timeout_for(name) if timeout_for else default_timeout
        tasks.append(asyncio.create_task(search_with_timeout(source, query, timeout)))

    results = await asyncio.gather(*tasks, return_exceptions=True)

    all_jobs: List[RawJobRecord] = []
    for name, result in zip(active.keys(), results):
        if isinstance(result, BaseException):
            logging.error(f"Error in {name} source: {str(result)}")
        elif result:
            logging.info(f"[Job Search] Found {len(result)} jobs from {name}")
            all_jobs.extend(result)
        else:
            logging.warning(f"No jobs found from {name}")

    return all_jobs


def dedupe_key(record: RawJobRecord) -> str:
    return f"{(record.employer_name or '').lower()}_{(record.job_title or '').lower()}"


def deduplicate_jobs(records: List[RawJobRecord]) -> List[RawJobRecord]:
    """Keep the first record for each (company, title) pair, compared case-insensitively"""
    seen = set()
    unique = []
    for record in records:
        key = dedupe_key(record)
        if key not in seen:
            seen.add(key)
            unique.append(record)

    logging.info(f"[Job Search] Total unique jobs: {len(unique)} (after removing duplicates)")
    return unique
