"""
Canned career answers.

Common career questions are answered from a fixed catalogue so they never reach
the language model. Off-topic questions get a canned redirect. Everything else
is left to the generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from career_chat.models.response import Classification, UserIntent


@dataclass(frozen=True)
class CareerResponse:
    id: str
    keywords: tuple[str, ...]
    response: str
    category: str
    confidence: float
    tags: tuple[str, ...] = ()
    follow_up_questions: tuple[str, ...] = ()
    related_topics: tuple[str, ...] = ()
    difficulty: str = "beginner"


COMMON_CAREER_RESPONSES: tuple[CareerResponse, ...] = (
    CareerResponse(
        id="resume-basics",
        keywords=("resume", "cv", "write resume", "resume help", "resume tips", "curriculum vitae"),
        response="""Here's your comprehensive resume guide:

**Structure & Flow**
- Contact info, professional summary, core competencies, work experience, education, additional sections
- Use reverse chronological order for experience
- Keep it scannable with clear headings and bullet points

**Content Excellence**
- Start bullets with strong action verbs (Led, Developed, Implemented, Achieved)
- Quantify everything: "Increased sales by 25%" vs "Responsible for sales"
- Tailor keywords to match job descriptions
- Focus on achievements, not just responsibilities

**Professional Format**
- 1-2 pages maximum (1 page for <10 years experience)
- Consistent fonts, 10-12pt font size, 1-inch margins
- Save as PDF to preserve formatting

**ATS Optimization**
- Use standard section headers
- Avoid graphics, tables, or complex formatting
- Include relevant industry keywords naturally

Ready to dive deeper into any specific section?""",
        category="resume",
        confidence=0.95,
        tags=("writing", "formatting", "ats", "optimization"),
        follow_up_questions=(
            "What's your current experience level?",
            "Which industry are you targeting?",
            "Do you need help with a specific resume section?",
        ),
        related_topics=("cover-letter", "linkedin-profile", "job-applications"),
    ),
    CareerResponse(
        id="resume-experience",
        keywords=("work experience", "job experience", "resume experience", "no experience", "entry level", "career gap"),
        response="""Let's optimize your work experience section:

**For Experienced Professionals**
- List positions in reverse chronological order
- 3-5 bullet points per role focusing on impact and results
- Use the CAR method: Challenge, Action, Result

**For Entry-Level/New Graduates**
- Include internships, co-ops, and significant part-time work
- Highlight relevant coursework and academic projects
- Add volunteer work that demonstrates transferable skills

**Handling Career Gaps**
- Be honest but strategic about gaps
- Include relevant activities during gaps (freelancing, education, caregiving)
- Consider a functional or hybrid resume format

What's your experience level? I can provide more targeted guidance.""",
        category="resume",
        confidence=0.9,
        tags=("experience", "entry-level", "career-gaps", "formatting"),
        follow_up_questions=(
            "How many years of experience do you have?",
            "Are you dealing with employment gaps?",
            "What industry are you targeting?",
        ),
        related_topics=("interview-prep", "career-change", "skills-development"),
        difficulty="intermediate",
    ),
    CareerResponse(
        id="interview-prep",
        keywords=("interview", "interview tips", "job interview", "interview preparation", "interview anxiety", "virtual interview"),
        response="""Your complete interview preparation roadmap:

**Pre-Interview Research (48-72 hours before)**
- Company deep dive: mission, values, recent news, competitors
- Role analysis: job description keywords, required skills, team structure
- Interviewer research: LinkedIn profiles, background, shared connections

**Content Preparation**
- Master the STAR method: Situation, Task, Action, Result
- Prepare 5-7 compelling stories showcasing different skills
- Practice your 60-second elevator pitch
- Develop thoughtful questions that show genuine interest

**Common Question Categories**
- Behavioral: "Tell me about a time when..."
- Situational: "How would you handle..."
- Technical: role-specific skills and knowledge
- Cultural fit: values alignment and team dynamics

**Virtual Interview Mastery**
- Test technology 30 minutes before
- Ensure good lighting and a professional background
- Maintain eye contact with the camera, not the screen

**Managing Interview Anxiety**
- Arrive 10-15 minutes early (or log in early for virtual)
- Practice deep breathing techniques
- Remember: they already like your resume!

What type of interview are you preparing for? I can provide more specific strategies.""",
        category="interview",
        confidence=0.95,
        tags=("preparation", "anxiety", "virtual", "behavioral", "research"),
        follow_up_questions=(
            "What type of interview is it (phone, video, in-person, panel)?",
            "What's the role and industry?",
            "How much time do you have to prepare?",
        ),
        related_topics=("salary-negotiation", "follow-up", "job-search"),
        difficulty="intermediate",
    ),
    CareerResponse(
        id="interview-questions",
        keywords=("interview questions", "common questions", "behavioral questions"),
        response="""Common interview questions and how to approach them:

**"Tell me about yourself"**: 2-minute professional summary focusing on relevant experience
**"Why this company?"**: Show research, align values, mention specific aspects that attract you
**"Strengths/Weaknesses"**: Real strengths with examples, a weakness you're actively improving
**Behavioral**: Use the STAR method with specific examples showing problem-solving and results

Would you like help preparing answers for any specific questions?""",
        category="interview",
        confidence=0.85,
        tags=("questions", "behavioral", "preparation"),
        follow_up_questions=(
            "What type of interview questions are you most concerned about?",
            "Do you have specific examples you'd like help structuring?",
        ),
        related_topics=("interview-prep", "resume", "confidence"),
    ),
    CareerResponse(
        id="job-search-strategy",
        keywords=("job search", "find job", "looking for job", "job hunting"),
        response="""Effective job search strategy:

**Online Platforms**: LinkedIn, Indeed, company websites, industry-specific boards
**Networking**: Reach out to connections, attend industry events, join professional groups
**Applications**: Tailor resume/cover letter for each role, follow up after 1-2 weeks
**Organization**: Track applications, set daily/weekly goals, maintain a consistent schedule

What industry or role type are you targeting? I can suggest specific resources.""",
        category="job-search",
        confidence=0.9,
        tags=("strategy", "platforms", "networking", "applications"),
        follow_up_questions=(
            "What industry are you targeting?",
            "How long have you been job searching?",
            "What's your biggest challenge in the job search?",
        ),
        related_topics=("resume", "interview-prep", "networking"),
    ),
    CareerResponse(
        id="salary-negotiation",
        keywords=("salary", "negotiate salary", "pay negotiation", "salary range"),
        response="""Salary negotiation tips:

**Research**: Use Glassdoor, PayScale, industry reports to know market rates
**Timing**: Wait for an offer before discussing salary, never negotiate during the first interview
**Approach**: Express enthusiasm first, then discuss compensation professionally
**Total Package**: Consider benefits, PTO, flexible work, professional development
**Practice**: Role-play the conversation, prepare your value proposition

Do you have a specific offer to negotiate, or are you preparing for future discussions?""",
        category="salary",
        confidence=0.85,
        tags=("negotiation", "research", "timing", "benefits"),
        follow_up_questions=(
            "Do you have a current offer to negotiate?",
            "What's your target salary range?",
            "Have you researched market rates for your role?",
        ),
        related_topics=("interview-prep", "job-search", "performance-review"),
        difficulty="intermediate",
    ),
    CareerResponse(
        id="skill-development",
        keywords=("skills", "learn skills", "skill development", "upskill", "reskill"),
        response="""Skill development strategies:

**Identify Gaps**: Review job postings in your field, note required skills you lack
**Learning Platforms**: Coursera, LinkedIn Learning, Udemy, free resources like Khan Academy
**Practice**: Build portfolio projects, contribute to open source, volunteer
**Certifications**: Industry-recognized credentials (Google, Microsoft, AWS, etc.)
**Networking**: Join professional communities, attend workshops, find mentors

What specific skills are you looking to develop? I can suggest targeted resources.""",
        category="skills",
        confidence=0.8,
        tags=("learning", "development", "certifications", "upskilling"),
        follow_up_questions=(
            "What specific skills do you want to develop?",
            "What's your preferred learning style?",
            "How much time can you dedicate to learning?",
        ),
        related_topics=("career-planning", "job-search", "career-change"),
    ),
    CareerResponse(
        id="career-change",
        keywords=("career change", "switch careers", "new career", "career transition"),
        response="""Career transition guidance:

**Self-Assessment**: Identify transferable skills, values, interests, and motivations for change
**Research**: Explore new field requirements, growth prospects, salary expectations
**Bridge Building**: Find connections between current and target roles
**Gradual Transition**: Consider part-time, freelance, or volunteer work in the new field first
**Network**: Connect with professionals in the target industry, conduct informational interviews

What field are you considering transitioning to? I can help create a transition plan.""",
        category="career-change",
        confidence=0.85,
        tags=("transition", "assessment", "planning", "skills-transfer"),
        follow_up_questions=(
            "What field are you considering transitioning to?",
            "What's motivating this career change?",
            "What transferable skills do you have?",
        ),
        related_topics=("skills-development", "networking", "resume"),
        difficulty="intermediate",
    ),
    CareerResponse(
        id="workplace-conflict",
        keywords=("workplace conflict", "difficult boss", "work problems", "office politics"),
        response="""Handling workplace challenges:

**Communication**: Address issues directly but professionally, document important conversations
**Boundaries**: Set clear expectations, learn to say no diplomatically
**Support**: Build relationships with colleagues, seek mentorship, use HR when appropriate
**Self-Care**: Maintain work-life balance, manage stress, consider if the environment is the right fit
**Solutions**: Focus on problem-solving rather than blame, suggest improvements

What specific workplace challenge are you facing? I can provide more targeted advice.""",
        category="workplace",
        confidence=0.8,
        tags=("conflict", "communication", "boundaries", "solutions"),
        follow_up_questions=(
            "What specific workplace challenge are you facing?",
            "How long has this been an issue?",
            "Have you tried addressing it directly?",
        ),
        related_topics=("leadership", "communication", "career-planning"),
        difficulty="intermediate",
    ),
    CareerResponse(
        id="career-planning",
        keywords=("career goals", "career planning", "career path", "professional development", "career roadmap"),
        response="""Your strategic career planning framework:

**Vision & Goals**: Define what success looks like in 10 years and set SMART milestones
**Skills Mapping**: Compare current strengths with future requirements and plan the gap
**Network**: Seek mentors for guidance, sponsors for advocacy, peers for support
**Visibility**: Excel in your current role, take stretch assignments, document achievements
**Future-Proofing**: Track industry trends and build transferable skills

Where are you in your career journey? I can help create a personalized development blueprint.""",
        category="general",
        confidence=0.9,
        tags=("planning", "goals", "strategy", "leadership", "development"),
        follow_up_questions=(
            "What's your current career level?",
            "What industry or function interests you most?",
            "What are your biggest career challenges right now?",
        ),
        related_topics=("leadership", "networking", "skills-development"),
        difficulty="advanced",
    ),
    CareerResponse(
        id="networking-strategy",
        keywords=("networking", "professional network", "linkedin", "relationship building", "connections"),
        response="""Master the art of strategic networking:

**Mindset**: Focus on giving value and building genuine, long-term relationships
**LinkedIn**: A headline that shows your value, a summary that tells your story, regular engagement
**Events**: Research attendees beforehand, prepare your pitch, follow up within 48 hours
**Outreach**: Warm introductions, informational interviews, consistent but gentle follow-up
**Maintenance**: Regular check-ins, congratulate milestones, share opportunities

Ready to build your networking strategy?""",
        category="networking",
        confidence=0.85,
        tags=("linkedin", "relationships", "events", "outreach"),
        follow_up_questions=(
            "What's your current networking comfort level?",
            "Which platforms do you use for professional networking?",
            "What industry events are available in your area?",
        ),
        related_topics=("job-search", "career-change", "leadership"),
        difficulty="intermediate",
    ),
    CareerResponse(
        id="leadership-development",
        keywords=("leadership", "management", "team lead", "leadership skills", "executive presence"),
        response="""Develop your leadership capabilities:

**Foundations**: Self-awareness, emotional intelligence, clear communication, sound decisions
**People Leadership**: Build trust, coach and mentor, create psychological safety
**Strategic Leadership**: Think in systems, create a vision, lead change with confidence
**Executive Presence**: Communicate confidently and influence without authority
**Growth**: Collect 360-degree feedback and seek leadership opportunities in your current role

What leadership challenges are you facing?""",
        category="leadership",
        confidence=0.88,
        tags=("management", "influence", "development", "presence"),
        follow_up_questions=(
            "What's your current leadership experience?",
            "What leadership challenges are you facing?",
            "Are you managing people or leading projects?",
        ),
        related_topics=("career-planning", "networking", "workplace"),
        difficulty="advanced",
    ),
    CareerResponse(
        id="salary-negotiation-advanced",
        keywords=("salary negotiation", "negotiate salary", "pay raise", "compensation", "salary increase", "underpaid"),
        response="""Master salary negotiation with this strategy:

**Research**: Use multiple sources and factor in location, company size and industry
**Timing**: After a successful project, at performance reviews, or at the offer stage
**Framework**: Start with gratitude, present data, use ranges instead of single numbers
**Beyond Base Salary**: Signing bonus, PTO, flexible work, development budget, equity
**Follow-up**: Get agreements in writing and set a regular compensation review

Ready to plan your negotiation strategy?""",
        category="salary",
        confidence=0.92,
        tags=("negotiation", "compensation", "research", "strategy"),
        follow_up_questions=(
            "What's your current salary situation?",
            "Do you have a specific number in mind?",
            "When are you planning to have this conversation?",
        ),
        related_topics=("interview-prep", "performance-review", "job-search"),
        difficulty="advanced",
    ),
    CareerResponse(
        id="remote-work-strategy",
        keywords=("remote work", "work from home", "virtual team", "digital nomad", "hybrid work", "flexible work"),
        response="""Navigate the future of work with remote success strategies:

**Workspace**: A dedicated, ergonomic space and clear boundaries between work and personal time
**Productivity**: Time-blocking, consistent routines, regular breaks
**Collaboration**: Video etiquette, regular check-ins, active participation
**Advancement**: Stay visible with regular updates and documented impact
**Job Search**: Target companies with a strong remote culture and highlight self-management

What aspect of remote work would you like to explore further?""",
        category="workplace",
        confidence=0.87,
        tags=("remote", "productivity", "collaboration", "future-work"),
        follow_up_questions=(
            "Are you currently working remotely or looking to transition?",
            "What remote work challenges are you facing?",
            "What tools are you currently using for remote work?",
        ),
        related_topics=("productivity", "technology", "work-life-balance"),
        difficulty="intermediate",
    ),
    CareerResponse(
        id="personal-branding",
        keywords=("personal brand", "online presence", "professional image", "thought leadership", "social media"),
        response="""Build a personal brand that accelerates your career:

**Foundation**: Define your unique value proposition and target audience
**LinkedIn**: A headline that shows your value and regular, thoughtful content
**Content**: Share expertise through articles, posts and talks
**Thought Leadership**: Speak at events, write guest articles, join panels
**Monitoring**: Review your online presence regularly and refine your message

Ready to build your professional brand strategy?""",
        category="networking",
        confidence=0.89,
        tags=("branding", "linkedin", "content", "thought-leadership"),
        follow_up_questions=(
            "What do you want to be known for professionally?",
            "Which platforms are you currently active on?",
            "What expertise or insights do you have to share?",
        ),
        related_topics=("networking", "linkedin", "career-planning"),
        difficulty="intermediate",
    ),
)

NON_CAREER_RESPONSE = """I'm a career counselor AI designed to help with professional development and job-related questions. I can assist with:

- Job searching and applications
- Resume and interview preparation
- Career planning and transitions
- Skill development and training
- Workplace challenges and advice
- Salary negotiation and benefits

How can I help you with your career goals today?"""

CAREER_KEYWORDS: tuple[str, ...] = (
    "job", "career", "work", "resume", "cv", "interview", "salary", "skill", "professional",
    "employment", "workplace", "boss", "company", "application", "promotion", "manager",
    "leadership", "networking", "linkedin", "portfolio", "experience", "qualification",
    "training", "development", "growth", "opportunity", "position", "role", "industry",
    # Tech and job titles
    "developer", "engineer", "programmer", "analyst", "consultant", "designer", "architect",
    "it", "tech", "software", "full stack", "frontend", "backend", "devops", "data scientist",
    "project manager", "product manager", "marketing", "sales", "hr", "finance", "accounting",
    # Experience and skills
    "years", "year", "months", "fresher", "junior", "senior", "lead", "principal", "director",
    "skills", "technologies", "programming", "coding", "languages", "frameworks",
    # Job search
    "hiring", "recruitment", "apply", "candidate", "employer", "recruiter",
)

# Only these exact phrases are answered from the catalogue
EXACT_MATCHES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("resume tips", "how to write resume", "resume help"), "resume-basics"),
    (("interview tips", "interview help", "interview preparation"), "interview-prep"),
    (("job search tips", "how to find job", "job hunting"), "job-search-strategy"),
    (("salary negotiation", "negotiate salary"), "salary-negotiation"),
)

_RESPONSES_BY_ID = {response.id: response for response in COMMON_CAREER_RESPONSES}


def get_career_response(response_id: str) -> Optional[CareerResponse]:
    return _RESPONSES_BY_ID.get(response_id)


def classify(message: str) -> Classification:
    """
    Match a message against the canned catalogue.

    Returns a common answer (``is_common`` with a category), the off-topic
    redirect (``is_common`` without a category), or ``is_common=False`` when
    the message needs the generator.
    """
    text = message.lower().strip()

    if not any(keyword in text for keyword in CAREER_KEYWORDS):
        return Classification(is_common=True, text=NON_CAREER_RESPONSE)

    for phrases, response_id in EXACT_MATCHES:
        if not any(phrase in text for phrase in phrases):
            continue
        response = get_career_response(response_id)
        if response:
            return Classification(
                is_common=True,
                text=response.response,
                category=response.category,
                confidence=response.confidence,
                follow_up_questions=list(response.follow_up_questions),
                related_topics=list(response.related_topics),
            )

    return Classification(is_common=False)


_POSITIVE_WORDS = ("excited", "happy", "love", "great", "awesome", "perfect")
_NEGATIVE_WORDS = ("frustrated", "worried", "anxious", "difficult", "struggling", "hate", "terrible")


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)


def analyze_user_intent(message: str) -> UserIntent:
    """Keyword reading of what the user wants, how urgently, and in what mood."""
    msg = message.lower()

    intent = "question"
    if _contains_any(msg, ("help me", "can you", "please")):
        intent = "request"
    elif _contains_any(msg, ("problem", "issue", "stuck")):
        intent = "problem"
    elif _contains_any(msg, ("want to", "goal", "achieve")):
        intent = "goal"

    urgency = "low"
    if _contains_any(msg, ("urgent", "asap", "immediately")):
        urgency = "high"
    elif _contains_any(msg, ("soon", "quickly", "help")):
        urgency = "medium"

    experience_level = "unknown"
    if _contains_any(msg, ("new", "beginner", "first time", "never")):
        experience_level = "beginner"
    elif _contains_any(msg, ("senior", "advanced", "executive", "years of experience")):
        experience_level = "advanced"
    elif _contains_any(msg, ("some experience", "intermediate")):
        experience_level = "intermediate"

    emotional_state = "neutral"
    if _contains_any(msg, _POSITIVE_WORDS):
        emotional_state = "positive"
    elif _contains_any(msg, _NEGATIVE_WORDS):
        emotional_state = "negative"

    return UserIntent(
        intent=intent,
        urgency=urgency,
        experience_level=experience_level,
        emotional_state=emotional_state,
    )


@dataclass
class ResponseStats:
    total_responses: int
    categories: dict[str, int] = field(default_factory=dict)
    average_confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalResponses": self.total_responses,
            "categories": dict(self.categories),
            "averageConfidence": self.average_confidence,
        }


def get_response_stats() -> ResponseStats:
    """Catalogue size, entries per category and mean confidence."""
    categories: dict[str, int] = {}
    for response in COMMON_CAREER_RESPONSES:
        categories[response.category] = categories.get(response.category, 0) + 1
    total = len(COMMON_CAREER_RESPONSES)
    average = sum(r.confidence for r in COMMON_CAREER_RESPONSES) / total if total else 0.0
    return ResponseStats(
        total_responses=total,
        categories=categories,
        average_confidence=round(average, 4),
    )
