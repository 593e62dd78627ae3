ANSWER_PROMPT = """You are writing an academic answer. Directly answer the following question using the provided context. Write naturally as if you deeply understand the material.

First, analyze if the question contains multiple parts (a, b, c, d) or separate activities/tasks:
1. Check if there are labeled parts like (a), (b), (c), etc.
2. Look for numbered tasks or activities
3. Identify if there are multiple questions within the main question
4. Note any requirements for separate files, diagrams, or additional materials

Question to Answer:
<<QUESTION>>

Context Information:
<<CONTEXT>>

Key Points to Consider:
<<REQUIREMENTS>>

<<CUSTOM_INSTRUCTIONS>>Important:
- If multiple parts exist, address each part separately but maintain flow
- Clearly indicate transitions between different parts/activities
- Write a direct, comprehensive answer
- Do not mention question numbers or page numbers
- Do not include any guidelines or meta-instructions
- Do not use AI-like formatting or bullet points
- Write in a natural academic style with proper paragraphing
- Seamlessly incorporate evidence from the context
- Let the answer flow naturally across paragraphs
- Use proper academic language while maintaining readability
- If diagrams or files are required, mention them naturally in the answer

Write your answer now:"""

CUSTOM_INSTRUCTIONS_BLOCK = """Custom Instructions:
<<INSTRUCTIONS>>

"""

ANSWER_INTRODUCTION = """Based on the analysis of the given materials, this response will address the key aspects of the question. The following discussion will examine the main points and provide a comprehensive answer supported by relevant evidence.

"""

ANSWER_REQUIREMENT_PARAGRAPH = "Furthermore, {requirement} can be addressed by examining the evidence presented in the materials. The analysis reveals several key points that support this understanding."

ANSWER_CONCLUSION = """

In conclusion, the analysis demonstrates a clear understanding of the key concepts and requirements. The evidence presented supports the main arguments, and the discussion has addressed the central aspects of the question. This comprehensive examination provides a solid foundation for understanding the topic at hand."""
