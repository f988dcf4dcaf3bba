#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Voice Flow
Turns transcribed speech into an intent with extracted details

Version: 1.0.0
"""

import logging

from eunoia.core.ai_service import AIService, AIServiceError, FlowTemplate
from eunoia.services.ai.schemas import ProcessVoiceInput, ProcessVoiceOutput
from eunoia.utils.text_utils import is_blank

logger = logging.getLogger(__name__)


def _unclear(response_text: str) -> ProcessVoiceOutput:
    return ProcessVoiceOutput(intent="unclear", response_text=response_text)


async def process_voice_input(data: ProcessVoiceInput, ai_service: AIService) -> ProcessVoiceOutput:
    if is_blank(data.transcribed_text):
        return _unclear("I didn't hear anything. Please try speaking again.")

    payload = {
        "transcribed_text": data.transcribed_text.strip(),
        "current_date": data.current_date.isoformat(),
    }

    try:
        result = await ai_service.generate_structured(FlowTemplate.VOICE_INPUT, payload, ProcessVoiceOutput)
    except AIServiceError as e:
        ai_service.record_fallback(FlowTemplate.VOICE_INPUT, e)
        return _unclear("There was an issue processing your voice input. Please try again.")

    if result is None:
        logger.error("Voice processing came back empty")
        return _unclear("I'm having a little trouble understanding right now. Please try again.")

    logger.info(f"Voice input classified as {result.intent}")
    return result


__all__ = ['process_voice_input']
