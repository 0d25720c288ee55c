"""Domain modules - Business logic organized by bounded contexts.

Note: Domain modules are imported lazily to avoid circular imports.
Import them directly where needed:

    from travel_agent.domains.assistant.schemas import Intent, EntityBag
    from travel_agent.domains.assistant.services import Orchestrator
"""
