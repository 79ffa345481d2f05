"""
Factory for building LangChain chains from configuration.

Centralizes chain construction logic, making it easy to modify chain behavior
without changing multiple files.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from langchain_openai import ChatOpenAI

from config import OPENAI_API_KEY

from .config import ChainConfig, CHAIN_CONFIGS


class ChainFactory:
    """Factory for building LangChain chains from configuration."""

    @staticmethod
    def build_prompt(config: ChainConfig) -> ChatPromptTemplate:
        return ChatPromptTemplate.from_messages([
            ("system", config.system_prompt),
            ("human", config.human_prompt_template),
        ])

    @staticmethod
    def build_llm(config: ChainConfig) -> BaseChatModel:
        # Retries are owned by the scoring client's retry policy, not the SDK
        return ChatOpenAI(
            model=config.llm_model,
            temperature=config.temperature,
            timeout=config.timeout,
            max_retries=0,
            api_key=OPENAI_API_KEY or None,
        )

    @staticmethod
    def build_chain(config: ChainConfig, llm: Optional[BaseChatModel] = None) -> Runnable:
        """
        Build a LangChain Runnable from configuration.

        Parameters:
            config: ChainConfig defining the chain
            llm: Chat model to use; defaults to ChatOpenAI built from config

        Returns:
            Runnable (prompt | llm | StrOutputParser) producing the raw reply text
        """
        llm = llm if llm is not None else ChainFactory.build_llm(config)
        return ChainFactory.build_prompt(config) | llm | StrOutputParser()

    @staticmethod
    def build_chain_by_name(name: str, llm: Optional[BaseChatModel] = None) -> Runnable:
        """
        Build a single chain by name from registry.

        Parameters:
            name: Chain name from CHAIN_CONFIGS
            llm: Optional chat model override

        Returns:
            Runnable

        Raises:
            KeyError: If chain name not found in CHAIN_CONFIGS
        """
        if name not in CHAIN_CONFIGS:
            raise KeyError(f"Unknown chain: {name}. Available: {list(CHAIN_CONFIGS.keys())}")
        return ChainFactory.build_chain(CHAIN_CONFIGS[name], llm=llm)
