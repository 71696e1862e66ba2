from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from approveflow.core.deps import get_assistant
from approveflow.schemas.assist import AssistResult, EmailDraftIn, ImageDescription
from approveflow.services.assistant import MetadataAssistant
from approveflow.services.files import UnsupportedAssetError, check_asset, read_upload

router = APIRouter()


@router.post("/describe-image", response_model=AssistResult[ImageDescription])
def describe_image(file: UploadFile = File(...), assistant: MetadataAssistant = Depends(get_assistant)):
    data = read_upload(file)
    try:
        check_asset(file.content_type, len(data))
    except UnsupportedAssetError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return assistant.describe_image(data, file.content_type)


@router.post("/email-draft", response_model=AssistResult[str])
def email_draft(data: EmailDraftIn, assistant: MetadataAssistant = Depends(get_assistant)):
    return assistant.draft_email(data.client_name, data.project_name, data.purpose)
