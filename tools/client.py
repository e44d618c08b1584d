"""
Object facade binding every primitive to one shared session.
"""

import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from es_types.primitives import BulkProcessorParameters, SearchParameters, SearchResponse
from es_types.providers import IndexNameAndIDProvider, IndexNameProvider, ItemHandler
from tools import primitives
from tools.primitives.bulk import BulkProcessor
from utils.connection import ElasticSession, test_connection


class ElasticClient:
    """
    Convenience wrapper over the primitive functions.

    Construct it once with the process-wide session and hand it to
    consumers. It holds no state of its own beyond the session.
    """

    def __init__(self, session: ElasticSession):
        self.session = session

    def ping(self) -> bool:
        return test_connection(self.session)

    # Search

    def search(self, params: SearchParameters) -> SearchResponse:
        return primitives.search(self.session, params)

    def search_with_dsl(self, index: str, query: Union[str, Dict[str, Any]]) -> SearchResponse:
        return primitives.search_with_dsl(self.session, index, query)

    def unmarshal_one(self, index: str, query: Dict[str, Any], target: Optional[Callable] = None) -> Any:
        return primitives.unmarshal_one(self.session, index, query, target)

    def unmarshal_most_recent(
        self,
        index: str,
        query: Dict[str, Any],
        timestamp_field: str,
        target: Optional[Callable] = None,
    ) -> Any:
        return primitives.unmarshal_most_recent(self.session, index, query, timestamp_field, target)

    def unmarshal_unique(self, index: str, query: Dict[str, Any], target: Optional[Callable] = None) -> Any:
        return primitives.unmarshal_unique(self.session, index, query, target)

    def count(self, index: str, query: Union[str, Dict[str, Any], None] = None) -> int:
        return primitives.count(self.session, index, query)

    # Scrolling

    def clear_scroll(self, scroll_id: Optional[str]) -> None:
        primitives.clear_scroll(self.session, scroll_id)

    def enumerate_items(
        self,
        index: str,
        query: Dict[str, Any],
        on_item: ItemHandler,
        sort: Optional[List[Any]] = None,
        cancel: Optional[threading.Event] = None,
        page_size: Optional[int] = None,
        keep_alive: Optional[str] = None,
    ) -> None:
        primitives.enumerate_items(
            self.session,
            index,
            query,
            on_item,
            sort=sort,
            cancel=cancel,
            page_size=page_size,
            keep_alive=keep_alive,
        )

    # Documents

    def do_index(self, index: str, data: Mapping[str, Dict[str, Any]]) -> None:
        primitives.do_index(self.session, index, data)

    def do_create(self, index: str, data: Mapping[str, Dict[str, Any]]) -> None:
        primitives.do_create(self.session, index, data)

    def do_index_with_name_provider(self, data: Mapping[str, IndexNameProvider]) -> None:
        primitives.do_index_with_name_provider(self.session, data)

    def marshal_with_name_and_id_provider(self, doc: IndexNameAndIDProvider) -> None:
        primitives.marshal_with_name_and_id_provider(self.session, doc)

    # Indices

    def index_exists(self, index: str) -> bool:
        return primitives.index_exists(self.session, index)

    def create_index(
        self,
        index: str,
        body: Union[str, Dict[str, Any], None] = None,
    ) -> Dict[str, Any]:
        return primitives.create_index(self.session, index, body)

    def ensure_index_with_mapping(self, index: str, mapping: Union[str, Dict[str, Any]]) -> None:
        primitives.ensure_index_with_mapping(self.session, index, mapping)

    def put_mapping(self, index: str, root: str, key: str, value_type: str) -> None:
        primitives.put_mapping(self.session, index, root, key, value_type)

    def flush_index(self, index: str) -> None:
        primitives.flush_index(self.session, index)

    def get_indices(self, prefixes: Sequence[str]) -> Dict[str, List[str]]:
        return primitives.get_indices(self.session, prefixes)

    # Bulk

    def run_bulk_processor(self, params: BulkProcessorParameters) -> BulkProcessor:
        return primitives.run_bulk_processor(self.session, params)
