"""
AI Module - generative AI integration for educational tools.

Architecture Overview:
=====================

    Router (/api/enhance-prompt, /api/generate-tool, /api/analyze-image)
                              │
                              ▼
                 EducationalToolService (tools/)
          builds prompts, strips code fences, checks HTML
                 │                          │
                 ▼                          ▼
       ResilientGenerator (retry.py)   direct provider call
   retry w/ backoff, model fallback    (image analysis, no retry)
                 │                          │
                 └────────────┬─────────────┘
                              ▼
                    GeminiProvider (providers/)
                 one call, one model, classified errors

Module Structure:
================
- errors.py: failure taxonomy + transient classification
- retry.py: ResilientGenerator
- providers/: provider clients
- prompts/: prompt templates
- tools/: educational tool service and HTML post-processing
- monitoring/: structured logging of attempts, retries and fallbacks
"""
