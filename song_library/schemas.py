from pydantic import BaseModel, Field


# Request schemas
class NewSong(BaseModel):
    title: str = Field(..., description="Song title")
    artist: str = Field(..., description="Performing artist")
    genre: str = Field(..., description="Genre label")


# Response schemas
class Song(BaseModel):
    id: int = Field(..., ge=1, description="Song ID")
    title: str
    artist: str
    genre: str
    play_count: int = Field(default=0, ge=0, description="Times played")


class ErrorResponse(BaseModel):
    error: str
