# src/flight_config/core/__init__.py
"""
Core do Flight Config.

Componentes principais:
    - document    → modelo de valores, namespace global e avaliadores
    - path        → parser de paths e resolver
    - config      → acessores tipados, overlay de settings e fachada
    - devices     → colaboradores de dispositivos e calibração
    - diagnostics → eventos estruturados espelhados no logging
    - errors      → hierarquia de exceções

Princípios fundamentais:
    - "Não encontrado" é resultado, não erro
    - Nenhuma falha de carga é fatal ao processo
    - Documento e overlay são armazenamentos explícitos e separados
"""
