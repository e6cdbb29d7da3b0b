"""Application layer - Use cases and orchestration.

This layer contains the application's use cases following the CQRS pattern:
- Commands: Write operations that change state (audit recording)
- Queries: Read operations that fetch data (matrix, evaluation, audit trail)
- Services: Stateless policy evaluation shared by handlers

Structure:
- commands/: Command dataclasses and handlers (write operations)
- queries/: Query dataclasses and handlers (read operations)
- services/: AccessEvaluator

The application layer orchestrates domain logic but contains no business rules.
"""
