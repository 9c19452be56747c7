from typing import Dict, Any

import google.generativeai as genai

import config


class BaseTool:
    """
    Base class for the Gemini-backed tools.
    Enforces dict-in, dict-out interface and provides a place for validation and error handling.
    """

    def __init__(self, model=None, api_key: str | None = None, model_name: str | None = None):
        self.api_key = api_key if api_key is not None else config.GEMINI_API_KEY
        self.model_name = model_name or config.GEMINI_MODEL
        self._model = model

    @property
    def model(self):
        """Lazily configured Gemini model; None when no API key is set."""
        if self._model is None and self.api_key:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    def __call__(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Main entrypoint for the tool. Subclasses should override this method.
        """
        raise NotImplementedError("Tool must implement __call__ with dict-in, dict-out signature.")

    def validate_input(self, input_data: Dict[str, Any]) -> None:
        """
        Optional: Validate input data. Raise ValueError if invalid.
        """
        pass

    def handle_error(self, error: Exception) -> Dict[str, Any]:
        """
        Optional: Standardized error handling. Returns a dict with error info.
        """
        return {"success": False, "error": str(error)}
