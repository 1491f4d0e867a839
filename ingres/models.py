# ingres/models.py
from pydantic import BaseModel, Field, validator
from typing import Any, Dict, List, Optional

# Request fields are optional so each function can answer missing input
# with its own error body instead of a generic 422.


class ChatRequest(BaseModel):
    """Persona chat request."""
    message: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    chat_type: Optional[str] = Field(None, alias="chatType")
    use_enhanced_knowledge: bool = Field(False, alias="useEnhancedKnowledge")


class ChatResponse(BaseModel):
    success: bool
    response: str


class EnhancedChatRequest(BaseModel):
    """Knowledge-grounded chat request."""
    message: Optional[str] = None
    user_profile: Optional[Dict[str, Any]] = Field(None, alias="userProfile")
    chat_history: Optional[List[Dict[str, Any]]] = Field(None, alias="chatHistory")


class ContextUsed(BaseModel):
    knowledge_items: int
    schemes_found: int
    conservation_tips: int
    location_data: int
    has_database_content: bool
    response_type: str


class EnhancedChatResponse(BaseModel):
    success: bool
    response: str
    context_used: ContextUsed


class GoogleSearchRequest(BaseModel):
    query: Optional[str] = None
    search_type: str = Field("web", alias="searchType")
    options: Dict[str, Any] = Field(default_factory=dict)


class DocumentSearchRequest(BaseModel):
    query: Optional[str] = None
    user_name: Optional[str] = Field(None, alias="userName")
    filters: Dict[str, Any] = Field(default_factory=dict)


class PdfExtractRequest(BaseModel):
    file_path: Optional[str] = Field(None, alias="filePath")
    original_name: Optional[str] = Field(None, alias="originalName")
    upsert_to_knowledge_base: bool = Field(True, alias="upsertToKnowledgeBase")
    language: str = "english"


class IngestionRequest(BaseModel):
    action: Optional[str] = None


class IngestionResponse(BaseModel):
    success: bool
    message: str
    stats: Dict[str, int]


class ContactRequest(BaseModel):
    """Contact form submission."""
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None

    @validator("name", "email", "message")
    def strip_whitespace(cls, v):
        """Whitespace-only input counts as missing."""
        return v.strip() if isinstance(v, str) else v


class ContactResponse(BaseModel):
    success: bool


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    gemini_available: bool
    openai_available: bool
    pollinations_available: bool
    database_configured: bool


class LocalDocumentUpload(BaseModel):
    """File kept in local storage only; `content` is base64."""
    filename: str
    content: str
    mime_type: Optional[str] = Field(None, alias="mimeType")
    metadata: Dict[str, Any] = Field(default_factory=dict)
