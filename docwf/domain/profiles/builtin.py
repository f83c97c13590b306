"""Document profiles shipped with docwf."""

from docwf.domain.models.document_profile import DocumentProfile


HOWTO_DOC_TYPE_DESCRIPTION = """# How-to guides

How-to guides take the reader through the steps required to solve a real-world problem.

They are recipes, directions to achieve a specific end - for example: *how to create a web form*; *how to plot a three-dimensional data-set*; *how to enable LDAP authentication*.

They are wholly **goal-oriented**.

**How-to guides are wholly distinct from tutorials** and must not be confused with them:

- A tutorial is what you decide a beginner needs to know.
- A how-to guide is an answer to a question that only a user with some experience could even formulate.

In a how-to guide, you can assume some knowledge and understanding. You can assume that the user already knows how to do basic things and use basic tools.

Unlike tutorials, how-to guides in software documentation tend to be done fairly well. They're also fun and easy to write.

## Analogy from cooking

Think about a recipe, for preparing something to eat.

A recipe has a clear, defined end. It addresses a specific question. It shows someone - who can be assumed to have some basic knowledge already - how to achieve something.

Someone who has never cooked before can't be expected to follow a recipe with success, so a recipe is not a substitute for a cooking lesson. At the same time, someone who reads a recipe would be irritated to find that it tries to teach basics that they know already, or contains irrelevant discussion of the ingredients.

## How to write good how-to guides

### Provide a series of steps

**How-to guides must contain a list of steps, that need to be followed in order** (just like tutorials do). You don't have to start at the very beginning, just at a reasonable starting point. How-to guides should be reliable, but they don't need to have the cast-iron repeatability of a tutorial.

### Focus on results

**How-to guides must focus on achieving a practical goal.** Anything else is a distraction. As in tutorials, detailed explanations are out of place here.

### Solve a particular problem

**A how-to guide must address a specific question or problem**: *How do I ...?*

This is one way in which how-to guides are distinct from tutorials: when it comes to a how-to guide, the reader can be assumed to know *what* they should achieve, but don't yet know *how* - whereas in the tutorial, *you* are responsible for deciding what things the reader needs to know about.

### Don't explain concepts

**A how-to guide should not explain things.** It's not the place for discussions of that kind; they will simply get in the way of the action. If explanations are important, link to them.

### Allow for some flexibility

**A how-to guide should allow for slightly different ways of doing the same thing.** It needs just enough flexibility in it that the user can see how it will apply to slightly different examples from the one you describe, or understand how to adapt it to a slightly different system or configuration from the one you're assuming. Don't be so specific that the guide is useless for anything except the exact purpose you have in mind.

### Leave things out

**Practical usability is more valuable than completeness.** Tutorials need to be complete, end-to-end guides; how-to guides do not. They can start and end where it seems appropriate to you. They don't need to mention everything that there is to mention either, just because it is related to the topic. A bloated how-to guide doesn't help the user get speedily to their solution.

### Name guides well

**The title of a how-to document should tell the user exactly what it does.** *How to create a class-based view* is a good title. *Creating a class-based view* or worse, *Class-based views*, are not.

## Example from documentation

Each how-to guide is an answer to a question, or problem: *how do I...?* Each title can clearly be preceded by the words "How to". Each one is a recipe, that takes you through the steps required to complete a specific task.

Although both the tutorials and the how-to guides serve the needs of the user, the tutorials are led by the author who knows what the user needs to know, while the how-to guides are led by the user who asks the questions."""


HOWTO_TEMPLATE = """<!-- You MUST replace all PLACE_HOLDERS -->
# TITLE_THAT_STARTS_WITH_VERB

<!-- You MUST provide an introduction of 2-4 sentences. -->
<!-- You MUST start the first sentence with a verb. -->

## Prerequisites

<!-- You MUST specify anything the developer must have in place before starting - anything they need to "bring to the table." -->
<!-- You MAY omit this section if there are no prerequisites. -->
<!-- You MUST use an unordered list for each requirement if there are two or more requirements. -->
<!-- You MUST NOT use a list if there is only one requirement. -->
<!-- You MUST NOT include calls-to-action or procedural guidance. -->
<!-- You MAY link to other documents or websites that DO contain procedures the developer can follow to satisfy a requirement. -->

## VERB_BASED_PROCEDURE_HEADER_WITH_NO_GERUNDS

<!-- You MUST provide the step(s) a developer must complete to accomplish the goal of the how-to. -->
<!-- You MAY introduce the procedure with a sentence or two about what it accomplishes and why. -->
<!-- You MUST use a sequentially numbered (ordered) list for the procedure's steps. -->
<!-- You MAY include optional steps prefixed with "(Optional)". -->
<!-- You SHOULD include output if a step or the procedure produces any to show the developer what success looks like. -->

## ANOTHER_VERB_BASED_PROCEDURE_HEADER_WITH_NO_GERUNDS

<!-- You SHOULD include additional procedural sections as needed to accomplish the goal of the how-to. -->
<!-- You SHOULD use additional procedure sections to split long procedures into digestible "chunks" to help keep developers on track. -->
<!-- You MAY omit additional procedure sections if a single procedure accomplishes the goal of the how-to. -->

## Clean up

<!-- You SHOULD provide the steps that help the developer clean up (delete, stop, etc.) any resources they no longer need once they've completed the procedures in the how-to. -->
<!-- You SHOULD warn the developer if there are consequences of NOT cleaning up, especially if they are fiduciary in nature. -->
<!-- You MUST warn the developer if there are security risks of NOT cleaning up. -->
<!-- You MUST warn the developer if there are data-loss risks if they DO clean up. -->
<!-- You MAY omit this section if no resources were created during the how-to that can or should be cleaned up. -->

## Next steps <!-- or alternate header "Recap" (see below) -->

<!-- You SHOULD include a one- or two-sentence summary of what the developer accomplished and why. -->
<!-- You SHOULD include an unordered list of one to three links with brief descriptions that direct the developer to the logical next steps their learning or task journey, if any. -->
<!-- You MAY omit the links and provide only the one- or two-sentence summary of what the developer accomplished and why. -->
<!-- You SHOULD prefer the one- or two-sentence summary over a list of links if you are not 100% certain the links are valid and contain relevant information. -->
<!-- You MUST use "Recap" for this section's header (instead of "Next steps") if you include only the summary and no links in this section. -->
"""


EXPLANATION_DOC_TYPE_DESCRIPTION = """# Explanation documents

Explanation documents provide background and context. They discuss a particular topic in depth.

They are for understanding, not for direct action. For example: *Understanding the Django request-response cycle*; *The MVT application architecture*.

They are **knowledge-oriented**.

## Analogy from teaching

Think of an explanation as a lecture or a chapter in a textbook. It's designed to build understanding of a subject. It's not a lab session or a workbook exercise. It provides the "why" behind the "how".

## How to write good explanation documents

### Focus on clarity and comprehension
The primary goal is to make a topic understandable. Use clear language, analogies, and examples.

### Structure logically
Start with a high-level overview and then drill down into details. Use headings to create a clear hierarchy of information.

### Use diagrams
Visual aids like Mermaid diagrams are extremely useful for illustrating concepts, architectures, and processes.

### Don't include instructions
Avoid providing step-by-step instructions. If a user needs to perform a task based on the knowledge, link to a relevant how-to guide or tutorial.

### Be comprehensive (but not exhaustive)
Cover the topic thoroughly, but avoid getting lost in tangents. Stick to the core concepts relevant to the document's purpose.

### Name documents well
The title should reflect the topic being explained. *A guide to authentication in Django* is good. *Authentication* is less descriptive."""


EXPLANATION_TEMPLATE = """---
title: "{{TITLE}}"
date: {{DATE}}
tags: [explanation, concept]
---

# {{TITLE}}

Provide a high-level overview of the concept being explained.

## Core concepts

Brief intro or list of core concepts.

## {{CONCEPT_1_TITLE}}

Detailed explanation of the first core concept.

Include Mermaid diagrams if they would aid in understanding the concept.

## {{CONCEPT_2_TITLE}}

Detailed explanation of the second core concept.

Include Mermaid diagrams if they would aid in understanding the concept.

## Architecture (if applicable)

Describe the system architecture.

## How it works

Explain the process or workflow.

## Key takeaways

List the key benefits or advantages.

## Further reading

- Link to related document 1
- Link to related document 2
"""


HOWTO_PROFILE = DocumentProfile(
    id="profile_howto_default",
    name="How-to guide",
    description="Provides step-by-step instructions to achieve a specific task.",
    doc_type_description=HOWTO_DOC_TYPE_DESCRIPTION,
    template=HOWTO_TEMPLATE,
)

EXPLANATION_PROFILE = DocumentProfile(
    id="profile_explanation_default",
    name="Explanation document",
    description="Explains a concept, system, or process in detail.",
    doc_type_description=EXPLANATION_DOC_TYPE_DESCRIPTION,
    template=EXPLANATION_TEMPLATE,
)

BUILTIN_PROFILES: tuple[DocumentProfile, ...] = (HOWTO_PROFILE, EXPLANATION_PROFILE)
