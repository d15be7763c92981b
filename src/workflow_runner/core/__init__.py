# src/workflow_runner/core/__init__.py
"""
Core do workflow_runner.

Componentes principais:
    - config       → carregamento e validação do arquivo de pipeline, hashing
    - pipeline     → contrato de Step, RunContext, Resolver e Registry
    - engine       → execução linear e fail-fast do pipeline
    - traceability → persistência do event log da run

Limites explícitos:
    - Não define Steps concretos (ver `workflow_runner.steps`)
    - Não depende da CLI
"""
