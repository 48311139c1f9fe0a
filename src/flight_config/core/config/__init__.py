# src/flight_config/core/config/__init__.py
"""
Camada de configuração do Flight Config.

Responsabilidades do pacote:
    - Leituras tipadas por path com fallback para default (`accessors`)
    - Overlay plano de settings persistido em disco (`settings`)
    - Fachada `Config`: carga, recarga, setters, save e calibração (`store`)

Invariantes:
    - Nenhum acessor levanta exceção
    - Setters escrevem documento e overlay de forma atômica
"""
