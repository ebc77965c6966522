"""Credibility Lens - credibility and authenticity reports for news and media.

Packages a news article, image, audio clip or video into a prompt, asks an
LLM for a structured report, and recovers a validated result (or a typed
error) from whatever text the model sends back.

Components:
- analysis: per-content-kind orchestration
- llm: model client, prompt building, JSON extraction and report validation
- schemas: requests, results and report descriptors
- retrieval: article text fetching for URL submissions
- mlops: MLflow tracing
- main_api: FastAPI endpoints
"""
