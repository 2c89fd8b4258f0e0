"""Service modules for snipbox.

- reconcile: merge of the persisted collection with an external list
- collection_ops: pure add/edit/delete transforms
- snippet_repository: typed access to the persistent store
- snippet_source: bundled-file and HTTP snippet sources
- clipboard: clipboard writes with fallbacks
- panel_controller: the stateful shell driving all of the above
"""
