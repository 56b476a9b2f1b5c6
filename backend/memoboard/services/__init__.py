# Services package init
"""
Memoboard Backend: Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and the datastore.
Why:   Routes handle HTTP, services handle rules (validation, existence checks,
       partial-update construction).

Service Inventory:
    - NoteService: list / create / get / update / delete notes
    - TodoService: list / create / get / update / delete todos

Services receive the Datastore as an argument on every call; they hold no
per-request state and are exposed as module-level singletons.
"""
