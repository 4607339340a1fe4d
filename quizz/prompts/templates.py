"""Quiz Templates - Prompts para geracao, avaliacao, analise e tutor."""

# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

QUIZ_SYSTEM_PROMPT = """You are a quiz generator. Respond ONLY with valid JSON, no additional text."""

GRADING_SYSTEM_PROMPT = """You are a strict but fair grader of quiz answers. Respond ONLY with valid JSON, no additional text."""

ANALYSIS_SYSTEM_PROMPT = """You analyze technical content to plan quizzes. Respond ONLY with valid JSON, no additional text."""

# =============================================================================
# GERACAO
# =============================================================================

MULTIPLE_CHOICE_INSTRUCTIONS = """For multiple-choice questions:
- Create questions with exactly 4 options where only 1 is correct
- Distractor difficulty should match the overall difficulty level
- Include "correct_index" (0-3) for the correct answer
- Include "type": "multiple-choice" for each multiple-choice question"""

MULTI_SELECT_INSTRUCTIONS = """For multi-select questions:
- Create questions with 4-6 options where MULTIPLE answers are correct
- Typically 2-3 correct answers out of the options
- Include "correct_indices" with all correct answer indices
- Include "type": "multi-select" for each multi-select question
- Good for testing comprehensive understanding of related concepts"""

OPEN_ENDED_INSTRUCTIONS = """For open-ended questions:
- Question depth should match the difficulty level
- Include 3-5 "key_points" the answer should cover (more nuanced for harder difficulties)
- Provide a model "expected_answer" appropriate to the difficulty
- Include "type": "open-ended" for each open-ended question"""

CODE_WRITING_INSTRUCTIONS = """For code-writing questions:
- Ask the user to write or complete code
- Include "type": "code-writing"
- Include a "language" field (e.g., "typescript", "python")
- Include an optional "starter_code" if providing a scaffold
- Include "expected_solution" with a model solution
- Include 3-5 "key_points" the solution should demonstrate
- Good for testing practical coding skills"""

CODE_CONTEXT_HINT = """- When asking about code, include a "code_context" array with code snippets"""

CODE_COMPARISON_HINT = '- For code comparison questions, include 2 snippets with labels like "Before"/"After"'

QUIZ_GENERATION_PROMPT = """You are generating quiz questions to test understanding of a coding session or technical content.
Generate exactly {question_count} questions.

{difficulty_guide}

Question types to include: {question_types}
{mix_instruction}

{type_instructions}

{focus_instruction}

For all questions:
- Questions should test practical understanding, not just memorization
- Include the source location when possible (e.g., "in the discussion about X")
- Explanations should help the learner understand, not just state the answer
- For coding content, test understanding of WHY not just WHAT

Content to generate questions from:
{content}

Respond with valid JSON in this exact structure:
{{
  "questions": [
    {{
      "type": "multiple-choice",
      "question": "...",
      "options": ["A", "B", "C", "D"],
      "correct_index": 0,
      "explanation": "...",
      "source": "optional source reference",
      "code_context": [{{"language": "typescript", "code": "const x = 1;", "label": "optional label"}}]
    }},
    {{
      "type": "multi-select",
      "question": "...",
      "options": ["A", "B", "C", "D", "E"],
      "correct_indices": [0, 2, 3],
      "explanation": "...",
      "source": "optional source reference"
    }},
    {{
      "type": "open-ended",
      "question": "...",
      "expected_answer": "...",
      "key_points": ["point1", "point2", "point3"],
      "explanation": "...",
      "source": "optional source reference"
    }},
    {{
      "type": "code-writing",
      "question": "Write a function that...",
      "language": "typescript",
      "starter_code": "function example() {{\\n  // your code here\\n}}",
      "expected_solution": "function example() {{ return 42; }}",
      "key_points": ["point1", "point2"],
      "explanation": "...",
      "source": "optional source reference"
    }}
  ]
}}

Note: code_context is optional for multiple-choice, multi-select and open-ended questions. Only include it when the question references specific code."""

# =============================================================================
# AVALIACAO
# =============================================================================

OPEN_ENDED_GRADING_PROMPT = """Evaluate this answer to a quiz question about coding/technical content.

Question: {question}

Expected answer: {expected_answer}

Key points that should be covered:
{key_points}

User's answer: {user_answer}

Evaluation strictness ({difficulty_label} difficulty):
{strictness}

Pass threshold: {threshold}% (score >= {threshold} means correct)

Respond with valid JSON:
{{
  "is_correct": true/false,
  "score": 0-100,
  "feedback": "explanation of evaluation",
  "matched_points": ["points that were covered"]
}}"""

CODE_GRADING_PROMPT = """Evaluate this code solution to a coding quiz question.

Question: {question}

Language: {language}

Expected solution:
```{language}
{expected_solution}
```

Key points the solution should demonstrate:
{key_points}

User's code:
```{language}
{user_code}
```

Evaluation strictness ({difficulty_label} difficulty):
{strictness}

Pass threshold: {threshold}% (score >= {threshold} means correct)

Evaluate based on:
1. Correctness: Does the code solve the problem?
2. Key points: Does it demonstrate the required concepts?
3. Code quality: Is it readable and well-structured?
4. Edge cases: Does it handle edge cases appropriately?

Respond with valid JSON:
{{
  "is_correct": true/false,
  "score": 0-100,
  "feedback": "explanation of evaluation with specific code feedback",
  "matched_points": ["key points that were demonstrated"]
}}"""

# =============================================================================
# ANALISE DE CONTEUDO
# =============================================================================

CONTENT_ANALYSIS_PROMPT = """Analyze this content and provide recommendations for quiz generation.

Identify:
1. Main topics covered (3-5 specific topics)
2. Overall complexity (low/medium/high based on technical depth)
3. Suggested number of questions (based on content length and density, 1-20)
4. Suggested difficulty level (easy/medium/hard/expert)
5. Content type (code/documentation/conversation/mixed)

Content to analyze:

{content}

Respond with valid JSON:
{{
  "topics": ["topic1", "topic2", "topic3"],
  "complexity": "low" | "medium" | "high",
  "suggested_question_count": 5,
  "suggested_difficulty": "easy" | "medium" | "hard" | "expert",
  "content_type": "code" | "documentation" | "conversation" | "mixed"
}}"""

# =============================================================================
# TUTOR
# =============================================================================

TUTOR_SYSTEM_PROMPT = """You are a helpful tutor discussing a quiz question with a student.

Quiz Topic: {topic}
Difficulty: {difficulty}

The student just answered question {question_number}:

Question: {question}
{options_line}
Their answer: {user_answer}
Result: {result}
{feedback_line}

Explanation: {explanation}

{previous_context}

Guidelines:
- Help the student understand this topic better
- Be encouraging and supportive
- Give clear, concise explanations
- Use code examples when helpful
- NEVER reveal upcoming questions or answers
- Stay focused on the current question and related concepts"""

TUTOR_PREVIOUS_QUESTION = """Q{number}: {question}
User's answer: {user_answer}
Result: {result}"""
