"""
LLM Service with Multi-Provider Fallback (OpenAI → Gemini)

Single entry point for every prompt the flows send out:
1. Fallback: Gemini answers when OpenAI is unavailable or fails
2. Observability: each call is an MLflow run with token and latency metrics
3. Bounded attempts: llm_max_attempts (default 1, i.e. no retry)

Architecture:
- Primary: OpenAI (gpt-4o)
- Fallback: Google Gemini (gemini-2.5-flash)
- Uses LangChain for provider abstraction
"""
import logging
import time
from typing import Dict, Any, Optional
from enum import Enum

import tiktoken
import mlflow
from langchain_openai import ChatOpenAI
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.messages import SystemMessage, HumanMessage
from tenacity import Retrying, stop_after_attempt, wait_exponential, before_sleep_log

from salary_insights.config import get_settings
from salary_insights.utils.prometheus_metrics import record_llm_usage

logger = logging.getLogger(__name__)

JSON_ONLY_SUFFIX = (
    "\n\nIMPORTANT: You MUST respond with valid JSON only. "
    "No additional text before or after the JSON."
)


def _message_text(content: Any) -> str:
    """LangChain may return a list of content blocks instead of a string."""
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return content or ""


class LLMProvider(str, Enum):
    """Available LLM providers."""
    OPENAI = "openai"
    GEMINI = "gemini"


class LLMService:
    """
    Multi-provider LLM service with automatic fallback.

    Flow:
    1. Try OpenAI (primary)
    2. If OpenAI fails → fallback to Gemini
    3. If both fail → raise exception
    """

    def __init__(self):
        self.settings = get_settings()

        self.openai_available = self._init_openai()
        self.gemini_available = self._init_gemini()

        if not self.openai_available and not self.gemini_available:
            raise RuntimeError(
                "No LLM providers configured. Set OPENAI_API_KEY or GEMINI_API_KEY"
            )

        # Token encoding for cost estimation
        try:
            self.encoding = tiktoken.encoding_for_model("gpt-4o")
        except Exception as e:
            logger.warning(f"Token encoding unavailable: {e}. Using word estimate.")
            self.encoding = None

        mlflow.set_tracking_uri(self.settings.mlflow_tracking_uri)
        mlflow.set_experiment(self.settings.experiment_name)

        logger.info(
            f"LLM Service initialized: "
            f"OpenAI={self.openai_available}, Gemini={self.gemini_available}"
        )

    def _init_openai(self) -> bool:
        """Initialize OpenAI provider if API key available."""
        if self.settings.openai_api_key is None:
            logger.warning("OPENAI_API_KEY not set - OpenAI unavailable")
            return False
        try:
            self.openai_client = ChatOpenAI(
                model=self.settings.openai_model,
                api_key=self.settings.openai_api_key.get_secret_value(),
                temperature=0.7,  # Default, overridden per call
                timeout=self.settings.timeout_seconds,
                max_retries=0,  # attempts are bounded by llm_max_attempts
            )
            logger.info(f"OpenAI initialized: {self.settings.openai_model}")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize OpenAI: {e}")
            return False

    def _init_gemini(self) -> bool:
        """Initialize Gemini provider if API key available."""
        if self.settings.gemini_api_key is None:
            logger.warning("GEMINI_API_KEY not set - Gemini unavailable")
            return False
        try:
            self.gemini_client = ChatGoogleGenerativeAI(
                model=self.settings.gemini_model,
                google_api_key=self.settings.gemini_api_key.get_secret_value(),
                temperature=0.7,
                timeout=self.settings.timeout_seconds,
                max_retries=0,
            )
            logger.info(f"Gemini initialized: {self.settings.gemini_model}")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize Gemini: {e}")
            return False

    def count_tokens(self, text: str) -> int:
        """
        Estimate token count for cost tracking.
        Note: Approximation for both OpenAI and Gemini.
        """
        if self.encoding is not None:
            try:
                return len(self.encoding.encode(text))
            except Exception as e:
                logger.warning(f"Token counting failed: {e}. Using word estimate.")
        return int(len(text.split()) * 1.3)

    def _call_openai(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
        response_format: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Call OpenAI via LangChain. JSON mode uses the native response_format."""
        # per-call options go with the request; the client is shared between threads
        options: Dict[str, Any] = {"temperature": temperature, "max_tokens": max_tokens}
        if response_format and response_format.get("type") == "json_object":
            options["response_format"] = response_format

        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt)
        ]
        response = self.openai_client.invoke(messages, **options)

        return {
            "content": _message_text(response.content),
            "provider": LLMProvider.OPENAI,
            "model": self.settings.openai_model
        }

    def _call_gemini(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
        response_format: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Call Gemini via LangChain.

        For JSON mode, we append instructions to the system prompt.
        """
        if response_format and response_format.get("type") == "json_object":
            system_prompt += JSON_ONLY_SUFFIX

        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt)
        ]
        response = self.gemini_client.invoke(
            messages,
            generation_config={"temperature": temperature, "max_output_tokens": max_tokens},
        )

        return {
            "content": _message_text(response.content),
            "provider": LLMProvider.GEMINI,
            "model": self.settings.gemini_model
        }

    def _generate_once(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
        response_format: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        args = (system_prompt, user_prompt, temperature, max_tokens, response_format)

        if self.openai_available:
            try:
                logger.debug("Attempting OpenAI...")
                result = self._call_openai(*args)
                logger.info("OpenAI succeeded")
                return result
            except Exception as e:
                logger.warning(f"OpenAI failed: {e}")
                if not self.gemini_available:
                    raise
                logger.warning("Falling back to Gemini...")
                try:
                    result = self._call_gemini(*args)
                except Exception as gemini_error:
                    logger.error(f"Gemini failed: {gemini_error}")
                    raise RuntimeError(
                        f"All providers failed: OpenAI failed: {e}; Gemini failed: {gemini_error}"
                    ) from gemini_error
                mlflow.log_param("fallback_used", True)
                logger.info("Gemini fallback succeeded")
                return result

        logger.debug("Using Gemini (OpenAI not configured)...")
        result = self._call_gemini(*args)
        logger.info("Gemini succeeded")
        return result

    def generate_response(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        response_format: Optional[Dict[str, Any]] = None,
        operation: str = "generation",
    ) -> Dict[str, Any]:
        """
        Generate LLM response with automatic fallback.

        Args:
            system_prompt: System/instruction prompt
            user_prompt: User input
            temperature: Sampling temperature (0.0-1.0)
            max_tokens: Maximum tokens to generate
            response_format: Optional format spec (e.g., {"type": "json_object"})
            operation: Label used for token metrics

        Returns:
            Dict with content, usage, model and provider
        """
        start_time = time.time()
        input_tokens = self.count_tokens(system_prompt + user_prompt)

        with mlflow.start_run(nested=True, run_name=operation):
            mlflow.log_param("operation", operation)
            retrying = Retrying(
                stop=stop_after_attempt(self.settings.llm_max_attempts),
                wait=wait_exponential(multiplier=1, min=4, max=10),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            )
            try:
                for attempt in retrying:
                    with attempt:
                        result = self._generate_once(
                            system_prompt, user_prompt, temperature,
                            max_tokens, response_format
                        )
            except Exception as e:
                logger.error(f"LLM generation failed: {e}")
                raise

            result_text = result["content"]
            output_tokens = self.count_tokens(result_text)
            total_tokens = input_tokens + output_tokens
            duration = time.time() - start_time

            mlflow.log_param("provider", result["provider"].value)
            mlflow.log_param("model", result["model"])
            mlflow.log_param("temperature", temperature)
            mlflow.log_param("input_tokens", input_tokens)
            mlflow.log_metric("duration_seconds", duration)
            mlflow.log_metric("output_tokens", output_tokens)
            mlflow.log_metric("total_tokens", total_tokens)

        record_llm_usage(operation, input_tokens, output_tokens)

        return {
            "content": result_text,
            "usage": {
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "total_tokens": total_tokens
            },
            "model": result["model"],
            "provider": result["provider"].value
        }


def get_llm_service() -> "LLMService":
    """Factory function to get LLM service instance."""
    return LLMService()
