# /eduguide/services/prompt_library.py

"""
This file is the central library for the prompts sent to the generative-AI
service. The suggestion service fills these templates; nothing else in the
code base writes prompt text.
"""

SUGGESTION_OPENING = "I need personalized teaching strategies for a student named {name}."

LITERACY_SECTION = """
Literacy Assessment:
- Average score: {average:.1f} out of 100
- Latest score: {latest_score:g} ({latest_date})
- Trend: {trend} ({earliest_score:g} → {latest_score:g})
- Total assessments: {count}"""

LITERACY_NO_DATA = "No literacy assessment data is available for this student yet."

SEL_SECTION = """
Social-Emotional Learning (SEL) Competencies (rated 1-5):
- Empathy: {empathy}
- Self-Regulation: {regulation}
- Cooperation: {cooperation}"""

SEL_NOT_ASSESSED = "Not assessed"

SEL_NO_DATA = "No SEL assessment data is available for this student yet."

REFLECTIONS_SECTION = """
Recent Teacher Observations:
{observations}"""

REFLECTION_BULLET = '- {date}: "{note}"'

SUGGESTION_INSTRUCTIONS = """
Based on this information, please provide:
1. 2-3 specific teaching strategies to support this student's literacy development (2-3 sentences each)
2. 1-2 approaches to strengthen their SEL skills, particularly focusing on any areas scoring below 3 (2-3 sentences each)
3. One focused learning activity that would engage this student based on their profile (3-4 sentences)
4. One brief suggestion for ongoing assessment to track their progress (2-3 sentences)

Keep your response concise and actionable. Use clear section headings and bullet points. Use simple formatting and avoid complex structures. Total response should be under 300 words."""

# Minimal prompt used to probe whether the configured credential works.
STATUS_PROBE_PROMPT = "Hello"
