# src/flight_config/core/errors.py
"""
Exceções canônicas do Flight Config.

Este módulo define a hierarquia oficial de exceções utilizadas durante a
avaliação de documentos (arquivo base e arquivo de settings) e a
resolução de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Falhas de avaliação carregam origem (arquivo) e linha
    - "Não encontrado" nunca é exceção: é um resultado esperado do resolver

Responsabilidades do módulo:
    - Expressar falhas de sintaxe e de execução de documentos
    - Expressar formatos de documento não suportados
    - Fornecer uma raiz comum (`ConfigError`) para captura genérica

Invariantes:
    - Todas as exceções do pacote herdam de `ConfigError`
    - Camadas inferiores levantam; apenas a fachada `Config` converte
      exceções em diagnósticos

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra diagnósticos
"""

from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """
    Exceção base para erros relacionados ao Flight Config.

    Esta hierarquia permite:
        - captura genérica de erros de configuração
        - distinção clara entre falha de avaliação e uso incorreto da API
    """


class EvaluationError(ConfigError):
    """
    Falha ao avaliar um documento (arquivo base, settings ou trecho avulso).

    A mensagem final segue o formato `origem:linha: mensagem`, para que o
    diagnóstico aponte diretamente o ponto de falha.

    Invariantes:
        - `source` identifica o documento avaliado (nome de arquivo ou rótulo)
        - `line` é 1-based, ou `None` quando a linha não é conhecida
    """

    def __init__(self, message: str, *, source: str = "<string>", line: Optional[int] = None):
        self.source = source
        self.line = line
        self.reason = message
        where = f"{source}:{line}" if line is not None else source
        super().__init__(f"{where}: {message}")


class ScriptSyntaxError(EvaluationError):
    """
    Erro de sintaxe no documento script.

    Decisões arquiteturais:
        - O trecho inteiro é rejeitado antes de qualquer execução
        - Nenhum binding global é criado quando este erro ocorre
    """


class ScriptRuntimeError(EvaluationError):
    """
    Erro de execução no documento script (ex.: indexar um valor nil).

    Decisões arquiteturais:
        - A execução é interrompida no statement que falhou
        - Bindings criados por statements anteriores são preservados
    """


class UnsupportedDocumentFormatError(EvaluationError):
    """
    Formato de documento estruturado não suportado.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidDocumentRootTypeError(EvaluationError):
    """
    O conteúdo raiz de um documento estruturado não é um mapa.

    Invariantes:
        - Apenas mapas podem ser aplicados ao namespace global
    """
