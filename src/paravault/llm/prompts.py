"""Prompt templates sent to the language model."""

USER_CONTEXT = """
User is a software engineer working on:
- AI/LLM projects (Claude API, RAG chatbots, Chrome extensions)
- Knowledge management systems
- Web development
""".strip()

CLASSIFICATION_PROMPT = (
    """
You are analyzing a screenshot of a social media post to extract and categorize its content for a knowledge management system using the PARA method.

Extract the following information from this screenshot and respond ONLY with valid JSON (no markdown, no code blocks, just raw JSON):

{
  "author": "@username",
  "authorName": "Display Name",
  "date": "approximate date if visible",
  "text": "full post text",
  "hasImages": true/false,
  "hasThread": true/false,
  "engagement": {
    "likes": number or null,
    "retweets": number or null,
    "replies": number or null
  },
  "category": "resource" or "project-idea",
  "confidence": 0.85,
  "tags": ["tag1", "tag2", "tag3"],
  "summary": "one-sentence key insight",
  "title": "suggested note title (4-6 words)",
  "relevance": "why this matters (2-3 sentences)"
}

CATEGORIZATION RULES:
- "resource" = learning material, reference, industry insights, tutorials, interesting facts
- "project-idea" = something that could be built, explored, or implemented
- "confidence" = 0.0 to 1.0 score indicating how certain you are about the categorization
  - 1.0 = very clear (obvious learning resource or obvious project idea)
  - 0.5 = unclear (could be either, ambiguous content, or not relevant to user)
  - Use 0.8+ for clear categorizations
  - Use 0.5-0.7 for uncertain cases

CONTEXT: """
    + USER_CONTEXT
    + """

Tags should be technical topics, technologies, or themes (max 5 tags).
"""
).strip()

QUERY_PROMPT = """
Based on this post, generate an optimal web search query to find related articles, tutorials, and resources.

Post content: "{text}"
Tags: {tags}
Category: {category}

Generate a concise search query (3-7 words) that will find the most relevant technical resources.
Respond with ONLY the search query text, nothing else.
""".strip()

FILTER_PROMPT = """
You are filtering web search results to find the most relevant resources for a software engineer.

Post content: "{text}"
User interests: AI/LLM projects, knowledge management, web development
Tags: {tags}

Search results:
{results}

For each result, assign a relevance score (0.0-1.0) and brief explanation.
Return ONLY valid JSON (no markdown, no code blocks):

{{
  "results": [
    {{
      "index": 1,
      "relevance": 0.95,
      "reason": "why this is relevant",
      "summary": "one-sentence summary of what this resource offers"
    }}
  ]
}}

Only include results with relevance >= {threshold}.
Prioritize: technical depth, actionable insights, credible sources.
""".strip()
