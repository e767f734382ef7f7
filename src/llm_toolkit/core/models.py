"""
Dataclasses métier pour LLM Toolkit.
"""
from dataclasses import dataclass, field, fields
from typing import List, Optional, Dict, Any, Mapping, Union


@dataclass(frozen=True)
class Message:
    """Message d'une conversation (immuable une fois créé)."""
    role: str
    content: str
    timestamp: str
    id: str

    def to_dict(self) -> Dict[str, Any]:
        """Convertit le message en dictionnaire."""
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp,
            "id": self.id
        }


@dataclass
class Conversation:
    """Conversation: historique ordonné + comptage de tokens."""
    id: str
    messages: List[Message] = field(default_factory=list)
    token_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def snapshot(self) -> "Conversation":
        """Copie détachée (liste de messages et métadonnées copiées)."""
        return Conversation(
            id=self.id,
            messages=list(self.messages),
            token_count=self.token_count,
            metadata=dict(self.metadata)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convertit la conversation en dictionnaire."""
        return {
            "id": self.id,
            "messages": [m.to_dict() for m in self.messages],
            "token_count": self.token_count,
            "metadata": dict(self.metadata)
        }


# Alias camelCase acceptés dans les dictionnaires d'options
_OPTION_ALIASES = {
    "maxTokens": "max_tokens",
    "apiKey": "api_key",
    "extraParams": "extra_params",
}


@dataclass
class CompletionOptions:
    """
    Options d'un appel de complétion.

    Côté appelant, tous les champs sont optionnels (None = non défini).
    Le toolkit résout une instance complète à chaque appel.
    """
    model: Optional[str] = None
    provider: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    stream: Optional[bool] = None
    api_key: Optional[str] = None
    endpoint: Optional[str] = None
    extra_params: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompletionOptions":
        """Crée une instance depuis un dictionnaire (snake_case ou camelCase)."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Option de complétion inconnue: {key}")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def coerce(cls, options: Union["CompletionOptions", Mapping[str, Any], None]) -> "CompletionOptions":
        """Normalise None / dict / instance en instance."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.from_dict(options)


@dataclass
class CompletionRequest:
    """Requête unitaire pour batch_completions."""
    conversation_id: str
    user_message: str
    options: Optional[CompletionOptions] = None

    @classmethod
    def coerce(cls, request: Union["CompletionRequest", Mapping[str, Any]]) -> "CompletionRequest":
        """Normalise un dictionnaire en instance."""
        if isinstance(request, cls):
            return request
        return cls(
            conversation_id=request.get("conversation_id", request.get("conversationId")),
            user_message=request.get("user_message", request.get("userMessage")),
            options=request.get("options")
        )
