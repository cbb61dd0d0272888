from .PromptSchemas import PromptCreate, PromptUpdate, PromptOut, PromptListResponse
from .ResumeSchemas import (
	ResumeFileIn,
	ResumeUploadRequest,
	ResumeUpdate,
	ResumeOut,
	ResumeDetail,
	ResumeListResponse,
)
from .CoverLetterSchemas import (
	CoverLetterCreate,
	CoverLetterUpdate,
	CoverLetterOut,
	CoverLetterSingleResponse,
	CoverLetterListResponse,
	CoverLetterExportRequest,
)
from .GenerationSchemas import GenerationRequest
