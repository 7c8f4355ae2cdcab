"""Prompt templates rendered by the prompt composer."""

METADATA_START = "<!-- METADATA_START -->"
METADATA_END = "<!-- METADATA_END -->"

# The user-info section is spliced in right before this heading
USER_INFO_ANCHOR = "\n\n## 🔄"

LANGUAGE_INSTRUCTIONS = {
    "en": "Please respond in English only.",
    "ja": "回答は必ず日本語でお願いします。",
}
DEFAULT_LANGUAGE_INSTRUCTION = LANGUAGE_INSTRUCTIONS["ja"]

DEFAULT_RECOMMENDATIONS = [
    "Focus on building foundational strength",
    "Prioritize learning correct form",
]

BALANCE_STATUS_LABELS = {
    "weak": "Needs work",
    "normal": "Standard",
    "strong": "Well developed",
}

META_PROMPT_TEMPLATE = """# Fat Loss & Ideal Muscle Balance Training System (Meta-Prompt)

## 🔄 Important: this prompt updates itself

**This is a meta-prompt.** When you send your training log, the assistant will:

1. **Analyze the data** - evaluate your latest performance and body composition
2. **Update muscle balance** - recalculate strength balance from the weights used
3. **Adjust the next plan** - set the best weights and reps for next time
4. **Generate a new prompt** - output the complete, updated prompt as an artifact

**⭐ How to use**: send your training log using the format below. The assistant immediately generates the prompt for your next session.

---

## System overview

This prompt provides:

1. **Muscle balance analysis from working weights**: infer your body's balance from the weights you actually lift
2. **Program adjustments toward ideal balance**: aim for proportions based on the golden ratio
3. **Flexible training structure**: keep the 8-session base structure while adapting to your development
4. **Automatic cycle tracking**: the next session follows automatically from the previous one
5. **🔄 Meta-prompt**: after each training log a fully updated prompt is generated

## Latest training log

**Last completed session**: {{lastSession}}
**Next session**: {{nextSession}}

## 🎯 Sending your training log

**Free text is fine!** Name, weight, reps and sets for each exercise are enough. After you send it, the assistant outputs the fully updated prompt for next time as an artifact.

### 📝 What to include

**Basics**:
- Exercise name, weight, reps and sets
- The date helps (optional)
- Cardio details are a bonus

**📱 Body composition**:
- Just upload a screenshot from your scale app
- Optional, but it allows a better-optimized plan

### ✅ Example

```
Dumbbell Squat 45 lb 10 reps 3 sets
Romanian Deadlift 45 lb 5 reps 3 sets
Weighted Crunch 35 lb 10 reps 3 sets
```

## 🔄 Instructions for the assistant (meta-prompt)

**When the user sends a training log, generate the new prompt with these steps:**

### Step 1: Extract and analyze
- Identify exercise names, weights, reps and sets from the free text
- Add the new results to the history
- Compare with the previous session

### Step 2: Update muscle balance
- Recalculate the relative strength of each muscle group
- Identify weak and strong regions

### Step 3: Adjust the next session
- Advance the session number
- Adjust each exercise's recommended weight based on the results

### Step 4: Generate the new prompt
- Produce a complete new prompt reflecting every update
- Output it as an artifact

### Key rules
1. **Output the whole prompt**: never a partial diff, always the complete prompt as an artifact
2. **Advance the session number**: move from the current session to the next automatically
3. **Adjust weights**: move the next recommended weight by ±5-10 lb based on results
4. **Assess muscle balance**: infer each region's development from the weights used
5. **Personalize**: adapt the program to the user's progress

### Response language
{{languageInstruction}}

## Next session details

### {{currentSession}}

**Strength training (20 min)**
{{exercises}}

**Cardio protocol (every session)**

**Option 1: HIIT (15 min)**
- Warm-up: 2 min (easy jog)
- Intervals: 30 s all-out sprint / 90 s recovery jog x 8
- Cool-down: 3 min (walk)

**Option 2: Zone 2 cardio (20-30 min)**
- Keep heart rate at 120-140 bpm
- Conversational pace
- Jogging, cycling or rowing machine

## Training cycle (8 sessions)

{{cycleOverview}}

## Muscle balance analysis

**Current assessment**:
- Upper body push (chest, shoulders, triceps): {{pushUpperBodyStatus}}
- Upper body pull (back, biceps): {{pullUpperBodyStatus}}
- Lower body front (quadriceps): {{lowerBodyFrontStatus}}
- Lower body back (hamstrings, glutes): {{lowerBodyBackStatus}}
- Core (abs, trunk): {{coreStatus}}

---
<!-- METADATA_START -->
{
  "sessionNumber": {{sessionNumber}},
  "sessionName": "{{sessionName}}",
  "date": "{{date}}",
  "exercises": {{exercisesJSON}},
  "muscleBalance": {{muscleBalanceJSON}},
  "recommendations": {{recommendationsJSON}},
  "nextSession": {{nextSessionNumber}},
  "cycleProgress": "{{cycleProgress}}"
}
<!-- METADATA_END -->"""

EXERCISE_ENTRY_TEMPLATE = """{{index}}. **{{name}}**
   - {{sets}} sets x {{targetReps}}
   - Recommended weight: {{weightLabel}}
   - Rest {{rest}} s between sets"""

CYCLE_SESSION_TEMPLATE = """### Session {{sessionNumber}}: {{title}}
{{#exercises}}{{index}}. **{{name}}** - {{sets}} sets x {{targetReps}}, {{weightLabel}}{{/exercises}}
"""

USER_INFO_TEMPLATE = """## User information
- Name: {{name}}
- Goals: {{goals}}
- Environment: {{environment}}

"""

TRAINING_PROMPT_TEMPLATE = """
# {{userName}}'s Training Program - Session {{sessionNumber}}

## Current status
- Training cycle: {{cycleNumber}}/8
- Last training: {{lastTrainingDate}}
- Goals: {{goals}}

## Today's workout: {{sessionTitle}}
{{#exercises}}
### {{name}}
- Sets: {{sets}}
- Recommended weight: {{weight}}{{unit}}
- Target reps: {{targetReps}}
{{/exercises}}

## Log your results
After training, send your results in this format:
```
Exercise name: weight x reps x sets
Example: Bench Press: 60kg x 10 reps x 3 sets
```

## Advice
{{advice}}
"""

FIRST_SESSION_ADVICE = "This is your first session. Take it easy and focus on form."
RETURNING_ADVICE = "You are progressing steadily. Stay focused today as well."

IMPORT_PROMPT_TEMPLATES = {
    "training": """
Organize the following training log as JSON.

[Log]
{{rawData}}

[Output format]
Always output JSON in exactly this format:
```json
{
  "type": "training_session",
  "date": "YYYY-MM-DD",
  "exercises": [
    {
      "name": "exercise name",
      "sets": [
        {
          "weight": number,
          "weightUnit": "kg" or "lbs",
          "reps": number,
          "rpe": number (1-10, optional)
        }
      ]
    }
  ],
  "notes": "notes"
}
```
""",
    "measurement": """
Extract the following information from the body composition screenshot or readings and output it as JSON.

[Input]
{{rawData}}

[Output format]
```json
{
  "type": "body_measurement",
  "date": "YYYY-MM-DD",
  "measurements": {
    "weight": { "value": number, "unit": "kg" },
    "bodyFatPercentage": number,
    "muscleMass": { "value": number, "unit": "kg" }
  }
}
```
""",
}

LEARNING_DATA_TEMPLATE = """

## 📊 Analysis from your training history

### Exercise progress
{{#progress}}- **{{exercise}}**: last {{lastWeight}} → recommended {{recommendedWeight}} ({{trend}}){{/progress}}

### Overall
- Progress: {{overallProgress}}
- Weekly frequency: {{workoutsPerWeek}}
- Streak: {{streak}} workouts

### Strengths
{{#strengths}}- {{text}}{{/strengths}}

### Areas for improvement
{{#areas}}- {{text}}{{/areas}}

### Muscle balance
- Upper body: {{upperBody}}%
- Lower body: {{lowerBody}}%
- Core: {{core}}%

Use this analysis to give more personalized advice."""

NO_HISTORY_NOTE = (
    "\n\nNote: this user has no workout history yet. Provide foundational advice."
)
