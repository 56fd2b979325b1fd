# api.py (resume fitness backend)
import json
import logging
from typing import Any, Dict, List, Tuple

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

import config
from ai_analyzer import get_default_client
from analyzer import analyze_one_resume, coerce_job
from nlp import get_nlp_handle
from parser import extract_text_from_bytes
from profile_extractor import extract_profile
from ranking import analyze_batch
from report import build_candidate_report

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Resume Fitness Engine")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # For local development
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalyzeTextRequest(BaseModel):
    resumeText: str
    fileName: str = ""
    jobDescription: Dict[str, Any]
    useLlm: bool = False


class ProfileRequest(BaseModel):
    resumeText: str
    fileName: str = ""


def _llm_client(enabled: bool):
    if not enabled:
        return None
    client = get_default_client()
    if client is None:
        logger.warning("LLM scoring requested but no client is configured; using rule-based scores.")
    return client


def _run_single_analysis(request: AnalyzeTextRequest):
    try:
        return analyze_one_resume(
            request.resumeText,
            request.jobDescription,
            file_name=request.fileName,
            nlp=get_nlp_handle(),
            llm_client=_llm_client(request.useLlm),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.get("/health")
async def health():
    return {"status": "ok", "llmConfigured": bool(config.OPENAI_API_KEY)}


@app.post("/analyze/text")
async def analyze_text_endpoint(request: AnalyzeTextRequest):
    analysis = await run_in_threadpool(_run_single_analysis, request)
    return analysis.to_dict()


@app.post("/profile")
async def profile_endpoint(request: ProfileRequest):
    return extract_profile(request.resumeText, request.fileName).to_dict()


@app.post("/report")
async def report_endpoint(request: AnalyzeTextRequest):
    analysis = await run_in_threadpool(_run_single_analysis, request)
    job = coerce_job(request.jobDescription)
    report = build_candidate_report(
        analysis, job, request.fileName or "resume", resume_text=request.resumeText
    )
    return report.to_dict()


@app.post("/analyze/")
async def analyze_resumes_endpoint(
    job: str = Form(...),
    resumes: List[UploadFile] = File(...),
    engine: str = Form("rules"),
):
    try:
        job_payload = json.loads(job)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Job description is not valid JSON: {exc}")
    if not isinstance(job_payload, dict):
        raise HTTPException(status_code=400, detail="Job description must be a JSON object.")

    resume_texts: List[Tuple[str, str]] = []
    for resume in resumes:
        data = await resume.read()
        file_name = resume.filename or f"resume_{len(resume_texts) + 1}"
        logger.info("Extracting text from %s (%s bytes)", file_name, len(data))
        text = await run_in_threadpool(extract_text_from_bytes, data, file_name)
        resume_texts.append((file_name, text))

    batch = await run_in_threadpool(
        analyze_batch,
        resume_texts,
        coerce_job(job_payload),
        get_nlp_handle(),
        _llm_client(engine.lower() == "llm"),
    )
    return batch.to_dict()
